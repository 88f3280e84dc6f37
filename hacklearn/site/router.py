"""Page registry and path routing.

Public API:
- RouteRegistry.list_routes(): the page table with path templates
- SiteRouter.route(path): match a path (with optional query string) and
  build the page payload

Unknown paths raise ``RouteNotFoundError``; unknown slugs inside a known
path raise ``ContentNotFoundError`` from the view.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, TypedDict
from urllib.parse import parse_qs, unquote, urlsplit

from hacklearn.core.logging_config import get_logger
from hacklearn.exceptions import RouteNotFoundError
from hacklearn.site import views
from hacklearn.site.views import SiteContext

__all__ = ["RouteDefinition", "RouteRegistry", "SiteRouter"]

_LOGGER = get_logger("site.router")

# -- Constants -----------------------------------------------------------------

ROUTE_HOME = "home"
ROUTE_MATERIAL = "material"
ROUTE_TOPIC = "topic"
ROUTE_PROJECTS = "projects"
ROUTE_PROJECT = "project"
ROUTE_ASSISTANT = "assistant"
ROUTE_ABOUT = "about"
ROUTE_SEARCH = "search"

_TEMPLATES: Tuple[Tuple[str, str, str], ...] = (
    (ROUTE_HOME, "/", "Landing page with the typewriter headline"),
    (ROUTE_MATERIAL, "/material", "Topic catalogue"),
    (ROUTE_TOPIC, "/material/{slug}", "Topic write-ups: normal, easy and deep"),
    (ROUTE_PROJECTS, "/projects", "Project catalogue"),
    (ROUTE_PROJECT, "/projects/{topic_slug}/{project_slug}", "Project details and download"),
    (ROUTE_ASSISTANT, "/assistant", "Keyword assistant; ?q= sends a message"),
    (ROUTE_ABOUT, "/about", "About page and comment board"),
    (ROUTE_SEARCH, "/search", "Full search results for ?q="),
)


class RouteDefinition(TypedDict):
    name: str
    path: str
    description: str


def _compile(template: str) -> re.Pattern[str]:
    pattern = re.sub(r"\{(\w+)\}", r"(?P<\1>[^/]+)", template)
    return re.compile(rf"^{pattern}/?$" if template != "/" else r"^/?$")


# -- Route Registry -----------------------------------------------------------


class RouteRegistry:
    """Expose the page table."""

    def list_routes(self) -> List[RouteDefinition]:
        return [
            {"name": name, "path": path, "description": description}
            for name, path, description in _TEMPLATES
        ]


# -- Site Router ---------------------------------------------------------------


View = Callable[..., Dict[str, Any]]


@dataclass
class SiteRouter:
    """Match paths to views."""

    context: SiteContext
    registry: RouteRegistry = field(default_factory=RouteRegistry)

    def _handlers(self) -> Dict[str, View]:
        return {
            ROUTE_HOME: lambda ctx, params, query: views.home(ctx),
            ROUTE_MATERIAL: lambda ctx, params, query: views.material(ctx),
            ROUTE_TOPIC: lambda ctx, params, query: views.topic_details(ctx, params["slug"]),
            ROUTE_PROJECTS: lambda ctx, params, query: views.projects(ctx),
            ROUTE_PROJECT: lambda ctx, params, query: views.project_details(
                ctx, params["topic_slug"], params["project_slug"]
            ),
            ROUTE_ASSISTANT: lambda ctx, params, query: views.assistant(ctx, query.get("q")),
            ROUTE_ABOUT: lambda ctx, params, query: views.about(ctx),
            ROUTE_SEARCH: lambda ctx, params, query: views.search_results_view(ctx, query.get("q", "")),
        }

    def match(self, path: str) -> Tuple[str, Dict[str, str], Dict[str, str]]:
        """Return ``(route name, path params, query params)`` for ``path``.

        Raises:
            RouteNotFoundError: nothing matches
        """
        parts = urlsplit(path)
        query = {k: v[0] for k, v in parse_qs(parts.query, keep_blank_values=True).items()}
        for definition in self.registry.list_routes():
            m = _compile(definition["path"]).match(parts.path or "/")
            if m:
                params = {k: unquote(v) for k, v in m.groupdict().items()}
                return definition["name"], params, query
        raise RouteNotFoundError(path)

    def route(self, path: str) -> Dict[str, Any]:
        name, params, query = self.match(path)
        _LOGGER.debug("Routing %s to %s", path, name, extra={"route": name})
        handler: Optional[View] = self._handlers().get(name)
        if handler is None:
            raise RouteNotFoundError(path)
        view = handler(self.context, params, query)
        view.setdefault("path", path)
        return view
