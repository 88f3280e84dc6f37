"""Topic/project dataset: the bundled sample content and file loading.

The dataset is loaded once at start-up and never mutated. Files may be
YAML (``.yaml``/``.yml``) or JSON; both are parsed with ``yaml.safe_load``
since JSON is a YAML subset.
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from hacklearn.core.logging_config import get_logger
from hacklearn.exceptions import ContentNotFoundError, DatasetError
from hacklearn.models import Dataset, Project, ProjectListing, Topic

__all__ = [
    "DEFAULT_DATA",
    "default_dataset",
    "find_project",
    "find_topic",
    "get_project",
    "get_topic",
    "list_projects",
    "load_dataset",
]

_LOGGER = get_logger("content.dataset")

_UNSPLASH = "https://images.unsplash.com/{photo}?q=80&w=1200&auto=format&fit=crop"

DEFAULT_DATA: Dict[str, Any] = {
    "topics": [
        {
            "slug": "sql-injection",
            "title": "SQL Injection",
            "image": _UNSPLASH.format(photo="photo-1558494949-ef010cbdcc31"),
            "summary": (
                "Understand how SQL queries can be manipulated and how to prevent it "
                "with parameterized queries and least privilege."
            ),
            "sidebar": [
                {"id": "types", "label": "Types of SQLi"},
                {"id": "get-based", "label": "GET-based"},
                {"id": "post-based", "label": "POST-based"},
                {"id": "blind-boolean", "label": "Blind Boolean"},
                {"id": "blind-time", "label": "Blind Time-based"},
                {"id": "error-based", "label": "Error-based"},
                {"id": "mitigations", "label": "Mitigations"},
            ],
            "content": {
                "normal": (
                    "SQL Injection (SQLi) occurs when user input is concatenated into SQL "
                    "statements without strict validation.\n\n"
                    "**Core idea:** attacker-controlled input breaks query structure.\n\n"
                    "**Symptoms:** unexpected data exposure, authentication bypass, data tampering.\n\n"
                    "**Defenses:** parameterized queries (prepared statements), stored procedures "
                    "(carefully), least-privilege DB users, rigorous input handling, and "
                    "centralized ORM/DB layer."
                ),
                "easy": (
                    "**Super Easy View**\n"
                    "- Think of SQL like a sentence the database understands.\n"
                    "- If you glue raw user text into that sentence, it might change the meaning.\n"
                    "- Always keep the sentence structure fixed and plug values in safely "
                    "(prepared statements).\n"
                    "- Give the app only the minimal DB permissions."
                ),
                "deep": (
                    "**Deep & Lengthy View**\n"
                    "- Categories: In-band (error-based, union-based), Inferential "
                    "(boolean/time blind), Out-of-band.\n"
                    "- Exploit flow: reconnaissance → injection point discovery → payload "
                    "crafting → exfiltration or control.\n"
                    "- Prevention: strict query parameterization; static analysis; query "
                    "allow-lists; RASP/WAF in layered defense.\n"
                    "- Testing: use intentionally vulnerable labs in a VM; never target systems "
                    "without explicit written permission."
                ),
            },
            "projects": [
                {
                    "slug": "login-bypass-lab",
                    "title": "Login Bypass Lab (Demo)",
                    "price": 10,
                    "image": _UNSPLASH.format(photo="photo-1518779578993-ec3579fee39f"),
                    "description": (
                        "A tiny vulnerable app for practicing parameterized vs concatenated "
                        "queries. Run only inside a VM."
                    ),
                    "tools": ["Docker", "SQLite", "Node.js"],
                    "download": "/downloads/login-bypass-lab.zip",
                },
            ],
        },
        {
            "slug": "xss",
            "title": "Cross-Site Scripting (XSS)",
            "image": _UNSPLASH.format(photo="photo-1544198365-3c3b3f8b034b"),
            "summary": (
                "Learn reflected, stored, and DOM-based XSS, and how to prevent using "
                "context-aware encoding and CSP."
            ),
            "sidebar": [
                {"id": "types", "label": "Types of XSS"},
                {"id": "reflected", "label": "Reflected"},
                {"id": "stored", "label": "Stored"},
                {"id": "dom", "label": "DOM-based"},
                {"id": "mitigations", "label": "Mitigations"},
            ],
            "content": {
                "normal": (
                    "XSS lets attackers run scripts in a victim's browser by injecting "
                    "untrusted data into pages."
                ),
                "easy": "**Super Easy:** Never let raw user text become HTML/JS. Encode it first.",
                "deep": (
                    "**Deep:** Output-encoding by context, input validation, CSP "
                    "'strict-dynamic', nonces, template auto-escaping."
                ),
            },
            "projects": [],
        },
    ],
}


def default_dataset() -> Dataset:
    """Return the bundled sample dataset."""
    return Dataset.model_validate(deepcopy(DEFAULT_DATA))


def load_dataset(path: Optional[str | Path] = None) -> Dataset:
    """Load and validate a dataset file, or the sample dataset when ``path`` is None.

    Raises:
        DatasetError: the file is missing, unparsable, or fails validation
    """
    if path is None:
        dataset = default_dataset()
        _LOGGER.info("Using bundled dataset", extra={"topics": len(dataset.topics)})
        return dataset

    source = str(path)
    try:
        with open(source, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        _LOGGER.error("Dataset file unreadable: %s", source)
        raise DatasetError(f"Cannot read dataset file {source}: {exc}", source=source) from exc
    except yaml.YAMLError as exc:
        _LOGGER.error("Dataset file is not valid YAML/JSON: %s", source)
        raise DatasetError(f"Cannot parse dataset file {source}: {exc}", source=source) from exc

    if isinstance(raw, list):
        raw = {"topics": raw}
    if not isinstance(raw, dict):
        raise DatasetError(f"Dataset root must be a mapping or a list of topics: {source}", source=source)

    try:
        dataset = Dataset.model_validate(raw)
    except PydanticValidationError as exc:
        _LOGGER.error("Dataset validation failed for %s", source)
        raise DatasetError(f"Invalid dataset {source}: {exc}", source=source) from exc

    _LOGGER.info("Dataset loaded", extra={"source": source, "topics": len(dataset.topics)})
    return dataset


def find_topic(dataset: Dataset, slug: str) -> Optional[Topic]:
    return next((t for t in dataset.topics if t.slug == slug), None)


def find_project(dataset: Dataset, topic_slug: str, project_slug: str) -> Optional[Project]:
    topic = find_topic(dataset, topic_slug)
    return topic.find_project(project_slug) if topic else None


def get_topic(dataset: Dataset, slug: str) -> Topic:
    """Like ``find_topic`` but raises ``ContentNotFoundError``."""
    topic = find_topic(dataset, slug)
    if topic is None:
        raise ContentNotFoundError.topic(slug)
    return topic


def get_project(dataset: Dataset, topic_slug: str, project_slug: str) -> ProjectListing:
    """Resolve ``topic/project`` to a listing or raise ``ContentNotFoundError``."""
    topic = find_topic(dataset, topic_slug)
    project = topic.find_project(project_slug) if topic else None
    if topic is None or project is None:
        raise ContentNotFoundError.project(topic_slug, project_slug)
    return ProjectListing(project=project, topic_slug=topic.slug, topic_title=topic.title)


def list_projects(dataset: Dataset) -> List[ProjectListing]:
    """All projects in topic order, each joined with its topic."""
    return [
        ProjectListing(project=p, topic_slug=t.slug, topic_title=t.title)
        for t in dataset.topics
        for p in t.projects
    ]
