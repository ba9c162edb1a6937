from __future__ import annotations

import random
from datetime import datetime

from ..models.chat_message import ChatMessage

"""Scripted chat assistant.

Keyword routing with a random fallback; no language model is involved.
`respond` is stateless and takes the random source as an argument so tests
can pin the fallback.
"""

__all__ = [
    "GREETING",
    "FALLBACK_RESPONSES",
    "KEYWORD_RESPONSES",
    "respond",
    "ChatTranscript",
]

GREETING = "Hello! I'm your AI assistant. How can I help you today?"

# checked in order; first keyword group found in the message wins
KEYWORD_RESPONSES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("sales", "revenue"),
        "I can see you're interested in sales data. Your dashboard shows comprehensive "
        "sales analytics with interactive charts.",
    ),
    (
        ("profit", "margin"),
        "Profit analysis is crucial for business growth. Check the Profit tab for "
        "detailed margin calculations.",
    ),
    (
        ("product", "item"),
        "Product performance can be viewed in your dashboard. Each product row is "
        "clickable for detailed insights.",
    ),
    (
        ("help", "assist"),
        "I'm here to help! You can ask me about sales, profits, products, or any "
        "data-related questions.",
    ),
)

FALLBACK_RESPONSES: tuple[str, ...] = (
    "That's interesting! Can you tell me more about that?",
    "I understand your question. Here's what I can help you with...",
    "Based on your query, I'd recommend checking your dashboard for detailed analytics.",
    "Great question! Let me help you with that information.",
    "I'm here to assist you with your business analytics and data insights.",
    "Thank you for your message. Is there anything specific about your sales data you'd like to know?",
    "I can help you analyze your profit margins and sales performance.",
    "Would you like me to explain any specific metrics from your uploaded data?",
    "I'm designed to help with business queries and data analysis.",
    "Feel free to ask me about your products, sales, or profit analysis!",
)


def respond(message: str, rng: random.Random | None = None) -> str:
    lowered = message.lower()
    for keywords, reply in KEYWORD_RESPONSES:
        if any(k in lowered for k in keywords):
            return reply
    return (rng or random.Random()).choice(FALLBACK_RESPONSES)


def _now() -> str:
    return datetime.now().strftime("%H:%M")


class ChatTranscript:
    """Message history: greeting first, then user/bot pairs with sequential ids."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.messages: list[ChatMessage] = [ChatMessage(id=1, text=GREETING, sender="bot", timestamp=_now())]

    def send(self, text: str) -> ChatMessage | None:
        """Append the user message and the reply; blank input is ignored.

        Returns the bot reply, or None when nothing was sent.
        """
        if text.strip() == "":
            return None
        user = ChatMessage(id=len(self.messages) + 1, text=text, sender="user", timestamp=_now())
        self.messages.append(user)
        reply = ChatMessage(
            id=len(self.messages) + 1,
            text=respond(text, self.rng),
            sender="bot",
            timestamp=_now(),
        )
        self.messages.append(reply)
        return reply
