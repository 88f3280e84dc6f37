"""Keyword search and the assistant built on it."""

from .assistant import Assistant, respond
from .index import (
    SUGGESTION_LIMIT,
    SearchResults,
    build_index,
    first_destination,
    resolve_route,
    search,
    search_results,
    suggest,
)

__all__ = [
    "Assistant",
    "SUGGESTION_LIMIT",
    "SearchResults",
    "build_index",
    "first_destination",
    "resolve_route",
    "respond",
    "search",
    "search_results",
    "suggest",
]
