"""Content dataset loading and lookup."""

from .dataset import (
    DEFAULT_DATA,
    default_dataset,
    find_project,
    find_topic,
    get_project,
    get_topic,
    list_projects,
    load_dataset,
)

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
