"""Reply text for every command."""

from data.models import EarningsDate, EarningsHistory, InsiderActivity, QuoteSnapshot
from config.constants import INSIDER_MAX_HOLDERS
from utils.formatting import format_currency, format_percent, format_price
from utils.time_utils import short_date

HELP_TEXT = (
    "**📚 Stoink Bot Commands**\n\n"
    "**Stock Lookups:**\n"
    "• `/SYMBOL` - Get stock price (e.g., `/AMD`, `/AAPL`, `/TSLA`)\n\n"
    "**Watchlist:**\n"
    "• `/watch add SYMBOL` - Add a stock to your watchlist\n"
    "• `/watch remove SYMBOL` - Remove a stock from watchlist\n"
    "• `/watch list` - Show your watchlist\n"
    "• `/watch clear` - Clear your entire watchlist\n\n"
    "**Earnings:**\n"
    "• `/earn estimate SYMBOL` - View earnings estimates\n"
    "• `/earn history SYMBOL` - View earnings history\n\n"
    "**Insider Trading:**\n"
    "• `/insider SYMBOL` - View last 5 insider transactions (default)\n"
    "• `/insider <limit> SYMBOL` - View custom number of transactions\n\n"
    "**AI Chat:**\n"
    "• Mention @Stoink to chat with AI!\n\n"
    "**Examples:**\n"
    "• `/NVDA`\n"
    "• `/watch add AAPL`\n"
    "• `/insider TSLA`\n"
    "• `/insider 10 AAPL`"
)

WATCH_HELP = (
    "**📋 Watchlist Commands:**\n"
    "• `/watch add SYMBOL` - Add a stock to your watchlist\n"
    "• `/watch remove SYMBOL` - Remove a stock from watchlist\n"
    "• `/watch list` - Show your watchlist with current prices\n"
    "• `/watch clear` - Clear your entire watchlist\n\n"
    "**Examples:**\n"
    "• `/watch add AAPL`\n"
    "• `/watch remove TSLA`\n"
    "• `/watch list`"
)

EARN_HELP = (
    "**📊 Earnings Commands:**\n"
    "• `/earn estimate SYMBOL` - View upcoming earnings estimates\n"
    "• `/earn history SYMBOL` - View past earnings history\n\n"
    "**Examples:**\n"
    "• `/earn estimate AAPL`\n"
    "• `/earn history NVDA`"
)

GREETING = (
    "👋 Hello! I'm online and ready to chat!\n\n"
    "Type `/help` to see all available commands!\n\n"
    "**Quick Start:**\n"
    "• `/AAPL` - Get stock price\n"
    "• `/watch add NVDA` - Add to watchlist\n"
    "• `/earn estimate META` - View earnings\n"
    "• `/insider TSLA` - View insider trades (default: 5)\n"
    "• Mention @Stoink to chat with AI!"
)

INVALID_TICKER_FORMAT = "❌ Invalid ticker format. Use /SYMBOL (e.g., /AMD, /AAPL, /TSLA)"
INSIDER_FORMAT_ERROR = "❌ Invalid format. Use: `/insider AAPL` or `/insider 10 AAPL`"


def invalid_symbol(example: str) -> str:
    return f"❌ Please provide a valid ticker symbol. Example: `{example}`"


def ticker_not_found(symbol: str) -> str:
    return f'❌ Couldn\'t find ticker "{symbol}". Try another? (Example: /AAPL)'


def _shares(value: int | None) -> str:
    return f"{value:,}" if value is not None else "N/A"


# ── Quotes ──

def format_quote(quote: QuoteSnapshot) -> str:
    return (
        f"**{quote.name} ({quote.symbol})**\n"
        f"💰 Price: {format_price(quote.price)}\n"
        f"📊 Change Today: {format_percent(quote.change_percent, signed=False)}\n"
        f"📈 Day High: {format_price(quote.day_high)}\n"
        f"📉 Day Low: {format_price(quote.day_low)}\n"
        f"🔼 52-Week High: {format_price(quote.fifty_two_week_high)}\n"
        f"🔽 52-Week Low: {format_price(quote.fifty_two_week_low)}"
    )


# ── Watchlist ──

def format_watchlist(symbols: list[str], quotes: list[QuoteSnapshot | None]) -> str:
    lines = ["**📋 Your Watchlist:**", ""]
    for symbol, quote in zip(symbols, quotes):
        if quote is None:
            lines.append(f"❌ **{symbol}** - Error fetching data")
            continue
        change = quote.change_percent or 0.0
        emoji = "📈" if change >= 0 else "📉"
        lines.append(f"{emoji} **{quote.symbol}** - {format_price(quote.price)} ({format_percent(change)})")
    return "\n".join(lines)


# ── Earnings ──

def format_earnings_estimate(estimate: EarningsDate) -> str:
    date_type = "📅 (Estimated)" if estimate.is_estimate else "📅 (Confirmed)"
    lines = [f"**{estimate.symbol} Earnings Estimate**", "", f"{date_type} **{short_date(estimate.report_date)}**", ""]

    if estimate.eps_average is not None:
        lines.append("📊 **EPS Estimate:**")
        lines.append(f"   Average: ${estimate.eps_average:.2f}")
        if estimate.eps_low is not None and estimate.eps_high is not None:
            lines.append(f"   Range: ${estimate.eps_low:.2f} - ${estimate.eps_high:.2f}")
        lines.append("")

    if estimate.revenue_average is not None:
        lines.append("💰 **Revenue Estimate:**")
        lines.append(f"   Average: {format_currency(estimate.revenue_average)}")
        if estimate.revenue_low is not None and estimate.revenue_high is not None:
            lines.append(f"   Range: {format_currency(estimate.revenue_low)} - {format_currency(estimate.revenue_high)}")

    return "\n".join(lines).rstrip()


def format_earnings_history(history: EarningsHistory, limit: int = 4) -> str:
    lines = [f"**{history.symbol} Earnings History**", "", "📈 **Recent Quarters:**"]
    for q in history.quarters[:limit]:
        actual = f"${q.eps_actual:.2f}" if q.eps_actual is not None else "N/A"
        estimate = f"${q.eps_estimate:.2f}" if q.eps_estimate is not None else "N/A"
        surprise = ""
        if q.surprise_percent is not None:
            pct = q.surprise_percent * 100
            surprise = f"(+{pct:.1f}% 📈)" if pct >= 0 else f"({pct:.1f}% 📉)"
        lines.append("")
        lines.append(f"**{q.label}**")
        lines.append(f"   Actual: {actual}   Estimate: {estimate}   {surprise}".rstrip())
    return "\n".join(lines)


def earnings_event_description(estimate: EarningsDate) -> str:
    text = (
        f"📊 **{estimate.symbol} Earnings Report**\n\n"
        f"Upcoming earnings announcement for {estimate.symbol}."
    )
    if estimate.eps_average is not None:
        text += f"\n\n**EPS Estimate:** ${estimate.eps_average:.2f}"
    if estimate.revenue_average is not None:
        text += f"\n**Revenue Estimate:** {format_currency(estimate.revenue_average)}"
    return text


# ── Insider ──

def format_insider_activity(activity: InsiderActivity, limit: int) -> str:
    lines = [f"**{activity.symbol} Insider Transactions**", ""]

    if activity.transactions:
        shown = activity.transactions[:limit]
        lines.append(f"📋 **Recent Transactions (Last {len(shown)}):**")
        lines.append("")
        for i, tx in enumerate(shown, 1):
            who = f"{tx.filer_name} ({tx.filer_relation})" if tx.filer_relation else tx.filer_name
            value = f"${tx.value / 1_000_000:.2f}M" if tx.value else "N/A"
            lines.append(f"**{i}. {who}**")
            lines.append(f"   {tx.text}")
            lines.append(f"   Shares: {_shares(tx.shares)}   Value: {value}")
            lines.append(f"   Date: {short_date(tx.start_date, tz=None)}")
            lines.append("")

    # Holder list only when there is little transaction activity to show
    if activity.holders and len(activity.transactions) < 3:
        lines.append("👥 **Top Insider Holders:**")
        lines.append("")
        for i, holder in enumerate(activity.holders[:INSIDER_MAX_HOLDERS], 1):
            lines.append(f"**{i}. {holder.name}**")
            if holder.relation:
                lines.append(f"   Position: {holder.relation}")
            lines.append(f"   Shares: {_shares(holder.shares)}")
            lines.append(f"   Latest Transaction: {short_date(holder.latest_transaction_date, tz=None)}")
            lines.append("")

    return "\n".join(lines).rstrip()
