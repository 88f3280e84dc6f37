"""
Keyword index over topics and projects.

External interface:
- ``build_index(dataset)``: flat list of ``IndexEntry``, topics first (dataset
  order), then projects (topic order, then project order)
- ``search(index, query, limit=SUGGESTION_LIMIT)``: case-insensitive
  substring match on titles, index order kept, no relevance scoring;
  ``limit=None`` returns every match (search-results page)
- ``resolve_route(entry)``: page path for an entry

All functions are pure and never raise for well-typed input.
"""

from __future__ import annotations

from typing import List, Optional, Sequence
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from hacklearn.core.logging_config import PerformanceLogger, get_logger
from hacklearn.models import Dataset, EntryKind, IndexEntry, ProjectListing, Topic

__all__ = [
    "SUGGESTION_LIMIT",
    "SearchResults",
    "build_index",
    "first_destination",
    "resolve_route",
    "search",
    "search_results",
    "suggest",
]

_LOGGER = get_logger("search.index")

SUGGESTION_LIMIT = 6

# URI-component reserved characters that stay unescaped in /search?q=
_URI_COMPONENT_SAFE = "!*'()"


def build_index(dataset: Dataset) -> List[IndexEntry]:
    """Flatten the dataset into searchable entries."""
    with PerformanceLogger(_LOGGER, "build_index", topics=len(dataset.topics)):
        topics = [
            IndexEntry(kind=EntryKind.TOPIC, title=t.title, slug=t.slug)
            for t in dataset.topics
        ]
        projects = [
            IndexEntry(kind=EntryKind.PROJECT, title=p.title, slug=f"{t.slug}/{p.slug}")
            for t in dataset.topics
            for p in t.projects
        ]
    return topics + projects


def _matches(title: str, needle: str) -> bool:
    return needle in title.casefold()


def search(
    index: Sequence[IndexEntry],
    query: str,
    limit: Optional[int] = SUGGESTION_LIMIT,
) -> List[IndexEntry]:
    """Return entries whose title contains ``query``, ignoring case (casefolded).

    With a ``limit`` (the suggestion variant) a blank query yields nothing.
    Without one every entry matches the empty string, as on the results page.
    """
    if limit is not None and not query.strip():
        return []
    needle = query.casefold()
    hits = [entry for entry in index if _matches(entry.title, needle)]
    if limit is not None:
        hits = hits[: max(limit, 0)]
    _LOGGER.debug("Search completed", extra={"query": query, "hits": len(hits)})
    return hits


def suggest(index: Sequence[IndexEntry], query: str, limit: int = SUGGESTION_LIMIT) -> List[IndexEntry]:
    """Suggestions shown under the search box while typing.

    ``limit`` can lower the cap but never raise it above ``SUGGESTION_LIMIT``.
    """
    return search(index, query, limit=min(limit, SUGGESTION_LIMIT))


def resolve_route(entry: IndexEntry) -> str:
    if entry.kind is EntryKind.TOPIC:
        return f"/material/{entry.slug}"
    return f"/projects/{entry.slug}"


def first_destination(
    index: Sequence[IndexEntry],
    query: str,
    limit: int = SUGGESTION_LIMIT,
) -> Optional[str]:
    """Where submitting the search box goes.

    The first suggestion's page when there is one, otherwise the
    results page for a non-empty query, otherwise nowhere.
    """
    suggestions = suggest(index, query, limit=limit)
    if suggestions:
        return resolve_route(suggestions[0])
    if query:
        return f"/search?q={quote(query, safe=_URI_COMPONENT_SAFE)}"
    return None


class SearchResults(BaseModel):
    """Unbounded matches grouped by kind, for the search-results page."""

    model_config = ConfigDict(frozen=True)

    query: str
    topics: List[Topic]
    projects: List[ProjectListing]

    @property
    def total(self) -> int:
        return len(self.topics) + len(self.projects)


def search_results(dataset: Dataset, query: str) -> SearchResults:
    needle = query.casefold()
    topics = [t for t in dataset.topics if _matches(t.title, needle)]
    projects = [
        ProjectListing(project=p, topic_slug=t.slug, topic_title=t.title)
        for t in dataset.topics
        for p in t.projects
        if _matches(p.title, needle)
    ]
    return SearchResults(query=query, topics=topics, projects=projects)
