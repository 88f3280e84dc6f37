"""Markup-subset to HTML rendering.

Supported conventions, applied in this order, each pass working on the
output of the previous one:

1. ``**text**`` -> ``<strong>text</strong>`` (non-greedy, a pair may span lines)
2. ``### ``, ``## ``, ``# `` at line start -> ``<h3>``, ``<h2>``, ``<h1>``
3. ``- `` at line start -> ``<li>`` (callers add the ``<ul>`` if they want one)
4. ``\\n\\n`` -> ``<br/><br/>``

Anything else passes through untouched, including single newlines and an
unpaired ``**``. The output is trusted HTML: no escaping is done, so the
input corpus must be trusted too.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

__all__ = ["MarkupRule", "RULES", "render"]


@dataclass(frozen=True, slots=True)
class MarkupRule:
    """One named text-to-text pass."""

    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _line_rule(name: str, marker: str, tag: str) -> MarkupRule:
    return MarkupRule(
        name=name,
        pattern=re.compile(rf"^{re.escape(marker)} ([^\r\n]*)", re.MULTILINE),
        replacement=rf"<{tag}>\1</{tag}>",
    )


RULES: Tuple[MarkupRule, ...] = (
    MarkupRule("bold", re.compile(r"\*\*(.*?)\*\*", re.DOTALL), r"<strong>\1</strong>"),
    # Most specific heading first
    _line_rule("heading3", "###", "h3"),
    _line_rule("heading2", "##", "h2"),
    _line_rule("heading1", "#", "h1"),
    _line_rule("list_item", "-", "li"),
    MarkupRule("paragraph_break", re.compile(r"\n\n"), "<br/><br/>"),
)


def render(text: str) -> str:
    """Render markup-subset ``text`` to HTML. Never raises for ``str`` input."""
    for rule in RULES:
        text = rule.apply(text)
    return text
