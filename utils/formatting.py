"""Number formatting, ticker validation and message splitting."""

import re

from config.constants import MAX_MESSAGE_LENGTH

_TICKER_PATTERN = re.compile(r"^[A-Z]{1,5}$")

# "/AMD" anywhere, or a standalone 2-5 letter uppercase word. Bare words also
# match common acronyms (CEO, USA), trading precision for recall.
_MENTIONED_TICKER_RE = re.compile(r"/([A-Z]{1,5})\b|(?:^|\s)([A-Z]{2,5})(?=\s|$|\?|,|\.)")

# Candidate symbols for the groundedness check
_CANDIDATE_SYMBOL_RE = re.compile(r"\b[A-Z]{2,5}\b")


def validate_ticker(symbol: str | None) -> str | None:
    """Validate and normalize a stock ticker symbol. Returns None if invalid."""
    if not symbol:
        return None
    symbol = symbol.upper().strip()
    if _TICKER_PATTERN.match(symbol):
        return symbol
    return None


def extract_ticker_symbols(text: str) -> list[str]:
    """Find ticker-looking tokens in free text, in order, without duplicates."""
    symbols: list[str] = []
    for match in _MENTIONED_TICKER_RE.finditer(text):
        symbol = match.group(1) or match.group(2)
        if symbol and symbol not in symbols:
            symbols.append(symbol)
    return symbols


def candidate_symbols(text: str) -> list[str]:
    """Uppercase 2-5 letter words that could be tickers."""
    return _CANDIDATE_SYMBOL_RE.findall(text)


def format_price(value: float | int | None) -> str:
    """Format a share price."""
    if value is None:
        return "N/A"
    return f"${value:,.2f}"


def format_currency(value: float | int | None, decimals: int = 2) -> str:
    """Format a number as currency."""
    if value is None:
        return "N/A"
    if abs(value) >= 1_000_000_000_000:
        return f"${value / 1_000_000_000_000:.{decimals}f}T"
    if abs(value) >= 1_000_000_000:
        return f"${value / 1_000_000_000:.{decimals}f}B"
    if abs(value) >= 1_000_000:
        return f"${value / 1_000_000:.{decimals}f}M"
    return f"${value:,.{decimals}f}"


def format_percent(value: float | None, decimals: int = 2, signed: bool = True) -> str:
    """Format a number as a percentage, '+' prefixed for non-negative values when signed."""
    if value is None:
        return "N/A"
    sign = "+" if signed and value >= 0 else ""
    return f"{sign}{value:.{decimals}f}%"


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Split a message into chunks respecting Discord's character limit."""
    if len(text) <= limit:
        return [text]

    chunks = []
    while text:
        if len(text) <= limit:
            chunks.append(text)
            break

        split_at = text.rfind("\n", 0, limit)
        if split_at == -1:
            split_at = text.rfind(" ", 0, limit)
        if split_at == -1:
            split_at = limit

        chunks.append(text[:split_at])
        text = text[split_at:].lstrip()

    return chunks
