"""Page payloads for the site.

Every view is a function of a ``SiteContext`` returning a JSON-ready dict.
Views render topic write-ups through the markup renderer and never touch
storage directly; purchases and comments go through their services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, List, Optional

from hacklearn.comments import CommentBoard
from hacklearn.config import Config
from hacklearn.content.dataset import get_project, get_topic, list_projects
from hacklearn.models import Dataset, IndexEntry, ProjectListing, Topic
from hacklearn.purchases import PurchaseLedger
from hacklearn.render.markup import render
from hacklearn.search.assistant import Assistant
from hacklearn.search.index import build_index, resolve_route, search_results, suggest
from hacklearn.storage import KeyValueStore, MemoryStore

__all__ = [
    "HOME_FEATURES",
    "HOME_WORDS",
    "SiteContext",
    "about",
    "assistant",
    "home",
    "material",
    "project_details",
    "projects",
    "search_results_view",
    "suggestions",
    "topic_details",
]

HOME_WORDS = (
    "An AI Assistant",
    "Summarized Notes",
    "Super Easy Notes",
    "Lengthy Notes",
    "Ethical Hacking Projects",
)

HOME_FEATURES = (
    {"title": "Organized Material", "desc": "Clear theory + practical guidance."},
    {"title": "AI Assistant", "desc": "Ask questions, find topics fast."},
    {"title": "Hands-on Projects", "desc": "Practice safely in a VM lab."},
    {"title": "Easy → Deep", "desc": "Pick your difficulty level."},
)

TAB_LABELS = {"normal": "Normal", "easy": "Super Easy", "deep": "Deep & Lengthy"}


@dataclass
class SiteContext:
    """Everything a view needs: the dataset, settings and the injected store."""

    dataset: Dataset
    config: Config = field(default_factory=Config)
    store: KeyValueStore = field(default_factory=MemoryStore)

    @cached_property
    def index(self) -> List[IndexEntry]:
        return build_index(self.dataset)

    @cached_property
    def ledger(self) -> PurchaseLedger:
        return PurchaseLedger(self.store)

    @cached_property
    def comments(self) -> CommentBoard:
        return CommentBoard(self.store, limit=self.config.comments.limit)

    @cached_property
    def assistant(self) -> Assistant:
        return Assistant(self.dataset)


def _topic_card(topic: Topic) -> Dict[str, Any]:
    return {
        "slug": topic.slug,
        "title": topic.title,
        "summary": topic.summary,
        "image": topic.image,
        "route": f"/material/{topic.slug}",
    }


def _project_card(listing: ProjectListing) -> Dict[str, Any]:
    return {
        "slug": listing.project.slug,
        "title": listing.project.title,
        "price": listing.project.price,
        "topic": listing.topic_title,
        "image": listing.project.image,
        "route": f"/projects/{listing.full_slug}",
    }


def home(ctx: SiteContext) -> Dict[str, Any]:
    return {
        "page": "home",
        "title": ctx.config.site.tagline,
        "typewriter": {"words": list(HOME_WORDS), "delay": 90, "hold": 900},
        "features": [dict(f) for f in HOME_FEATURES],
    }


def material(ctx: SiteContext) -> Dict[str, Any]:
    return {
        "page": "material",
        "title": "Material",
        "topics": [_topic_card(t) for t in ctx.dataset.topics],
    }


def topic_details(ctx: SiteContext, slug: str) -> Dict[str, Any]:
    """Topic page with sidebar anchors and the three rendered write-ups."""
    topic = get_topic(ctx.dataset, slug)
    return {
        "page": "topic",
        "slug": topic.slug,
        "title": topic.title,
        "summary": topic.summary,
        "sidebar": [{"id": s.id, "label": s.label} for s in topic.sidebar],
        "tabs": [
            {"id": key, "label": label, "html": render(getattr(topic.content, key))}
            for key, label in TAB_LABELS.items()
        ],
        "projects": [
            _project_card(ProjectListing(project=p, topic_slug=topic.slug, topic_title=topic.title))
            for p in topic.projects
        ],
    }


def projects(ctx: SiteContext) -> Dict[str, Any]:
    return {
        "page": "projects",
        "title": "Projects",
        "projects": [_project_card(listing) for listing in list_projects(ctx.dataset)],
    }


def project_details(ctx: SiteContext, topic_slug: str, project_slug: str) -> Dict[str, Any]:
    """Project page; the download reference appears only once the project is owned."""
    listing = get_project(ctx.dataset, topic_slug, project_slug)
    project = listing.project
    owned = ctx.ledger.is_owned(listing)
    return {
        "page": "project",
        "slug": listing.full_slug,
        "title": project.title,
        "description": project.description,
        "price": project.price,
        "topic": listing.topic_title,
        "tools": list(project.tools),
        "owned": owned,
        "download": ctx.ledger.download_ref(listing) if owned else None,
    }


def suggestions(ctx: SiteContext, query: str) -> List[Dict[str, str]]:
    limit = ctx.config.search.suggestion_limit
    return [
        {"kind": e.kind.value, "title": e.title, "route": resolve_route(e)}
        for e in suggest(ctx.index, query, limit=limit)
    ]


def assistant(ctx: SiteContext, text: Optional[str] = None) -> Dict[str, Any]:
    """Assistant page; ``text`` is sent as a new message when given."""
    if text is not None:
        ctx.assistant.ask(text)
    return {
        "page": "assistant",
        "title": "AI Assistant",
        "messages": ctx.assistant.rendered(),
    }


def about(ctx: SiteContext) -> Dict[str, Any]:
    return {
        "page": "about",
        "title": "About",
        "author": ctx.config.site.author,
        "comments": ctx.comments.list(),
    }


def search_results_view(ctx: SiteContext, query: str) -> Dict[str, Any]:
    results = search_results(ctx.dataset, query)
    return {
        "page": "search",
        "title": f"Search: {query}",
        "query": query,
        "topics": [_topic_card(t) for t in results.topics],
        "projects": [_project_card(listing) for listing in results.projects],
        "total": results.total,
    }
