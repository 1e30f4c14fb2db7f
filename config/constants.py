"""Constants used across the application."""

import re
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


# Conversation memory
MAX_CONVERSATION_HISTORY = 10
CONVERSATION_TIMEOUT_SECONDS = 15 * 60
CONVERSATION_SWEEP_SECONDS = 5 * 60

# Channel transcript used to ground the model
MAX_TRANSCRIPT_MESSAGES = 100

# Process lifecycle
IDLE_CHECK_SECONDS = 60

# Typing indicator lasts ~10s on Discord
TYPING_REFRESH_SECONDS = 8.0

# Earnings events
EARNINGS_EVENT_HORIZON_DAYS = 90
EARNINGS_EVENT_HOUR_UTC = 21  # 1:00 PM Pacific (standard time)
EARNINGS_EVENT_DURATION_MINUTES = 60
EARNINGS_SYNC_DELAY_SECONDS = 0.5
EARNINGS_EVENT_SUFFIX = "Earnings Report"

# Insider command
INSIDER_DEFAULT_LIMIT = 5
INSIDER_MAX_LIMIT = 50
INSIDER_MAX_HOLDERS = 5

# Discord hard limit per message
MAX_MESSAGE_LENGTH = 2000

# Fixed replies. The first three double as markers for filtering the bot's own
# refusals out of transcripts.
REFUSAL_MARKERS = (
    "I only respond based on",
    "I don't have that information",
    "My AI brain is offline",
)
NO_INFO_SENTENCE = "I don't have that information in the chat history."
NO_INFO_REPLY = (
    f"{NO_INFO_SENTENCE} Please use the available commands to look it up first "
    "(e.g., `/SYMBOL` for stock prices, `/watch list` for your watchlist, "
    "`/earn estimate SYMBOL` for earnings)."
)
AI_OFFLINE_REPLY = (
    "🤖 My AI brain is offline right now. I can still look up stock tickers for you though! "
    "Just mention a ticker symbol (like AAPL, TSLA, AMD)."
)

# Keyword fallback used when the model call fails
FALLBACK_REPLIES = (
    (re.compile(r"hello|hi|hey", re.IGNORECASE), "Hey! Want to look up a stock?"),
    (re.compile(r"how are you", re.IGNORECASE), "I'm just chilling in the cloud 😎"),
    (re.compile(r"thanks|thank you", re.IGNORECASE), "You're welcome!"),
)

# Questions that can be answered without anything in the transcript
GENERAL_QUESTION_RE = re.compile(
    r"^(hello|hi|hey|thanks|thank you|how are you|what can you do|help)",
    re.IGNORECASE,
)
