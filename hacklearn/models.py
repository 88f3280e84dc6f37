"""Pydantic models for the topic/project dataset and the search index.

- A ``Dataset`` is an ordered list of ``Topic``; each topic owns its
  ``Project`` list. Topic slugs are unique across the dataset, project
  slugs are unique within their topic.
- Raw dataset files may spell the download reference ``download`` (the
  older dataset key) or ``download_ref``.
- Everything is frozen: the dataset is read-only once loaded.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


__all__ = [
    "Dataset",
    "EntryKind",
    "IndexEntry",
    "Project",
    "ProjectListing",
    "SidebarItem",
    "Topic",
    "TopicContent",
]


class SidebarItem(BaseModel):
    """Anchor link shown in a topic's sidebar."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    label: str


class TopicContent(BaseModel):
    """The three difficulty-tiered write-ups of a topic, in markup-subset text."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    normal: str = ""
    easy: str = ""
    deep: str = ""


class Project(BaseModel):
    """Downloadable practice project, gated behind a simulated purchase."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    slug: str = Field(min_length=1)
    title: str
    price: int = Field(ge=0)
    description: str = ""
    tools: List[str] = Field(default_factory=list)
    download_ref: str = Field(validation_alias=AliasChoices("download_ref", "download"))
    image: Optional[str] = None

    @field_validator("tools")
    @classmethod
    def _dedupe_tools(cls, v: List[str]) -> List[str]:
        # Tools are a set; keep first-seen order for display
        return list(dict.fromkeys(v))


class Topic(BaseModel):
    """Content unit with tiered write-ups and zero or more projects."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    slug: str = Field(min_length=1)
    title: str
    summary: str = ""
    content: TopicContent = Field(default_factory=TopicContent)
    sidebar: List[SidebarItem] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    image: Optional[str] = None

    @model_validator(mode="after")
    def _unique_project_slugs(self) -> "Topic":
        seen = set()
        for project in self.projects:
            if project.slug in seen:
                raise ValueError(
                    f"duplicate project slug {project.slug!r} in topic {self.slug!r}"
                )
            seen.add(project.slug)
        return self

    def find_project(self, slug: str) -> Optional[Project]:
        return next((p for p in self.projects if p.slug == slug), None)


class Dataset(BaseModel):
    """Ordered collection of topics."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    topics: List[Topic] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_topic_slugs(self) -> "Dataset":
        seen = set()
        for topic in self.topics:
            if topic.slug in seen:
                raise ValueError(f"duplicate topic slug {topic.slug!r}")
            seen.add(topic.slug)
        return self


class ProjectListing(BaseModel):
    """A project joined with its owning topic, as shown on project cards."""

    model_config = ConfigDict(frozen=True)

    project: Project
    topic_slug: str
    topic_title: str

    @property
    def full_slug(self) -> str:
        return f"{self.topic_slug}/{self.project.slug}"


class EntryKind(str, Enum):
    TOPIC = "topic"
    PROJECT = "project"


class IndexEntry(BaseModel):
    """Flattened, searchable projection of a topic or project.

    ``slug`` is the resolvable slug: the topic slug for topics and
    ``topic/project`` for projects.
    """

    model_config = ConfigDict(frozen=True)

    kind: EntryKind
    title: str
    slug: str
