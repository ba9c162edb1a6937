from __future__ import annotations

from dataclasses import dataclass

"""Chat transcript message."""


@dataclass(frozen=True)
class ChatMessage:
    id: int
    text: str
    sender: str  # "user" | "bot"
    timestamp: str  # HH:MM local time
