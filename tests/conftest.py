"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import pytest

from hacklearn.content.dataset import default_dataset
from hacklearn.models import Dataset
from hacklearn.storage import MemoryStore


@pytest.fixture
def dataset() -> Dataset:
    """The bundled sample dataset (sql-injection + xss)."""
    return default_dataset()


def _topic(slug: str, title: str, projects: List[Dict[str, Any]] | None = None) -> Dict[str, Any]:
    return {
        "slug": slug,
        "title": title,
        "summary": f"{title} summary",
        "content": {"normal": f"**{title}**", "easy": "- easy", "deep": "# deep"},
        "sidebar": [{"id": "types", "label": "Types"}],
        "projects": projects or [],
    }


def _project(slug: str, title: str, price: int = 10) -> Dict[str, Any]:
    return {
        "slug": slug,
        "title": title,
        "price": price,
        "description": f"{title} description",
        "tools": ["Docker"],
        "download": f"/downloads/{slug}.zip",
    }


@pytest.fixture
def large_dataset() -> Dataset:
    """Ten 'Lab' topics with two 'Lab' projects each: 30 entries matching 'lab'."""
    topics = [
        _topic(
            f"lab-topic-{i}",
            f"Lab Topic {i}",
            [_project(f"lab-a-{i}", f"Lab Project A{i}"), _project(f"lab-b-{i}", f"Lab Project B{i}")],
        )
        for i in range(10)
    ]
    return Dataset.model_validate({"topics": topics})


@pytest.fixture
def ordering_dataset() -> Dataset:
    """A project titled 'SQL ...' precedes the only topic whose title contains 'SQL'."""
    return Dataset.model_validate(
        {
            "topics": [
                _topic("web-basics", "Web Basics", [_project("sql-warmup", "SQL Warmup Lab")]),
                _topic("sql-injection", "SQL Injection", [_project("login-bypass-lab", "Login Bypass Lab (Demo)")]),
            ]
        }
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def restore_root_logging():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
