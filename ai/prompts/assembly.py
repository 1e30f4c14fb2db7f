"""Turn a chat transcript into a grounded message sequence for the model.

The transcript is flattened into one text block inside the system message,
followed by the user's utterance. Before any model call, `has_relevant_data`
decides whether the transcript could plausibly answer the question at all.
"""

from collections.abc import Sequence
from datetime import datetime

from ai.conversation import TranscriptEntry
from ai.prompts.system import GROUNDED_SYSTEM_PROMPT, GROUNDING_RULES, STOCK_DATA_SECTION
from config.constants import (
    GENERAL_QUESTION_RE,
    MAX_TRANSCRIPT_MESSAGES,
    REFUSAL_MARKERS,
    Role,
)
from data.models import QuoteSnapshot
from utils.formatting import candidate_symbols
from utils.time_utils import format_transcript_timestamp, long_date


def is_refusal(entry: TranscriptEntry) -> bool:
    """True for the bot's own fallback/refusal lines."""
    return entry.is_bot and any(marker in entry.content for marker in REFUSAL_MARKERS)


def filter_transcript(
    transcript: Sequence[TranscriptEntry],
    limit: int = MAX_TRANSCRIPT_MESSAGES,
) -> list[TranscriptEntry]:
    """Last `limit` entries with the bot's refusals removed."""
    return [entry for entry in list(transcript)[-limit:] if not is_refusal(entry)]


def format_transcript(transcript: Sequence[TranscriptEntry]) -> str:
    lines = []
    for entry in transcript:
        author = f"[BOT] {entry.author}" if entry.is_bot else entry.author
        content = entry.content or "[No text content]"
        lines.append(f"[{format_transcript_timestamp(entry.timestamp)}] {author}: {content}")
    return "\n".join(lines)


def has_relevant_data(text: str, chat_history: str, stock_data: str = "") -> bool:
    """Heuristic gate: could this question be answered from what we have?"""
    if stock_data.strip():
        return True

    mentioned = candidate_symbols(text)
    if mentioned and not any(symbol in chat_history for symbol in mentioned):
        return False

    if GENERAL_QUESTION_RE.match(text):
        return True

    return bool(chat_history.strip())


def format_stock_data(quotes: Sequence[QuoteSnapshot]) -> str:
    """Compact one-line-per-symbol block injected as current data."""
    lines = []
    for q in quotes:
        change = f"{q.change_percent:.2f}" if q.change_percent is not None else "N/A"
        lines.append(
            f"{q.symbol}: Price=${q.price}, DayHigh=${q.day_high}, DayLow=${q.day_low}, "
            f"52WeekHigh=${q.fifty_two_week_high}, 52WeekLow=${q.fifty_two_week_low}, "
            f"Change={change}%"
        )
    return "\n".join(lines)


def build_system_prompt(chat_history: str, stock_data: str = "", now: datetime | None = None) -> str:
    return GROUNDED_SYSTEM_PROMPT.format(
        current_date=long_date(now),
        rules=GROUNDING_RULES,
        chat_history=chat_history,
        stock_data=STOCK_DATA_SECTION.format(stock_data=stock_data) if stock_data else "",
    )


def build_messages(
    text: str,
    username: str,
    chat_history: str,
    stock_data: str = "",
    now: datetime | None = None,
) -> list[dict[str, str]]:
    """System entry (rules + history + optional data) followed by the user's turn."""
    return [
        {"role": Role.SYSTEM.value, "content": build_system_prompt(chat_history, stock_data, now)},
        {"role": Role.USER.value, "content": f"{username}: {text}"},
    ]
