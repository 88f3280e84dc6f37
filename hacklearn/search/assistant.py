"""Keyword assistant that points users at a topic or project page.

There is no language understanding here: the whole message is matched as a
substring against titles. Topics are searched first and any topic match
wins, even when a project earlier in the dataset also matches; projects are
only consulted when no topic title contains the text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from hacklearn.core.logging_config import get_logger
from hacklearn.models import Dataset
from hacklearn.render.markup import render

__all__ = [
    "Assistant",
    "ChatMessage",
    "GREETING",
    "NO_MATCH_REPLY",
    "REPLY_PREFIX",
    "respond",
]

_LOGGER = get_logger("search.assistant")

REPLY_PREFIX = "I searched your content: "
NO_MATCH_REPLY = "No exact match. Try keywords like 'SQL Injection' or 'Login Bypass Lab'."
GREETING = "Ask about topics or projects. I can find materials and summarize."

Role = Literal["system", "user", "assistant"]


def respond(text: str, dataset: Dataset) -> str:
    """Build the assistant's reply for ``text``.

    An empty message is a substring of every title, so it lands on the
    first topic.
    """
    needle = text.casefold()

    topic = next((t for t in dataset.topics if needle in t.title.casefold()), None)
    if topic is not None:
        _LOGGER.debug("Assistant matched topic", extra={"slug": topic.slug})
        return f"{REPLY_PREFIX}Found topic **{topic.title}**.\nOpen: /material/{topic.slug}"

    for t in dataset.topics:
        for p in t.projects:
            if needle in p.title.casefold():
                _LOGGER.debug("Assistant matched project", extra={"slug": f"{t.slug}/{p.slug}"})
                return (
                    f"{REPLY_PREFIX}Found project **{p.title}**.\n"
                    f"Open: /projects/{t.slug}/{p.slug}"
                )

    _LOGGER.info("Assistant found no match", extra={"query": text})
    return f"{REPLY_PREFIX}{NO_MATCH_REPLY}"


@dataclass(slots=True)
class ChatMessage:
    role: Role
    content: str

    def to_dict(self, *, rendered: bool = False) -> Dict[str, str]:
        return {
            "role": self.role,
            "content": render(self.content) if rendered else self.content,
        }


@dataclass
class Assistant:
    """Chat transcript for the assistant page."""

    dataset: Dataset
    messages: List[ChatMessage] = field(
        default_factory=lambda: [ChatMessage("system", GREETING)]
    )

    def ask(self, text: str) -> str:
        reply = respond(text, self.dataset)
        self.messages.append(ChatMessage("user", text))
        self.messages.append(ChatMessage("assistant", reply))
        return reply

    def last_reply(self) -> Optional[str]:
        for message in reversed(self.messages):
            if message.role == "assistant":
                return message.content
        return None

    def rendered(self) -> List[Dict[str, str]]:
        """Transcript with every message passed through the markup renderer."""
        return [m.to_dict(rendered=True) for m in self.messages]
