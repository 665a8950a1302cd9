"""Pydantic models for portfolio content."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Type

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializeAsAny,
    field_validator,
)

Family = Literal["posts", "projects", "learning"]


def _coerce_date(value: Any) -> Any:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str):
        try:
            return dt.datetime.fromisoformat(value.strip()).date()
        except ValueError as exc:
            raise ValueError(f"date '{value}' is not an ISO-8601 calendar date") from exc
    return value


class ContentMetadata(BaseModel):
    """Front-matter shared by every content family.

    Keys that no family recognizes are kept and exposed through ``extras``.
    """

    title: str = Field("", description="Display title.")
    date: Optional[dt.date] = Field(
        None, description="Publication date used for ordering; undated items sort last."
    )
    description: str = Field("", description="Short teaser shown in listings.")
    tags: List[str] = Field(
        default_factory=list,
        description="Free-form tags for grouping or navigation.",
    )

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        return _coerce_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @property
    def extras(self) -> Dict[str, Any]:
        """Front-matter keys outside the recognized schema."""

        return dict(self.model_extra or {})


class PostMetadata(ContentMetadata):
    """Front-matter for content/posts/*.md files."""

    category: Optional[str] = None
    featured: bool = False
    read_time: Optional[str] = Field(None, alias="readTime")
    image: Optional[str] = None


class ProjectMetadata(ContentMetadata):
    """Front-matter for content/projects/*.md files."""

    status: Optional[str] = None
    category: Optional[str] = None
    featured: bool = False
    image: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    github_url: Optional[str] = Field(None, alias="githubUrl")
    demo_url: Optional[str] = Field(None, alias="demoUrl")

    @field_validator("technologies", "features", mode="before")
    @classmethod
    def _none_as_list(cls, value: Any) -> Any:
        return [] if value is None else value


class LearningMetadata(ContentMetadata):
    """Front-matter for content/learning/<journey>/*.md files."""

    status: Optional[str] = None
    read_time: Optional[str] = Field(None, alias="readTime")
    journey: Optional[str] = Field(
        None, description="Journey named in the file; the directory wins."
    )


class ContentItem(BaseModel):
    """A parsed markdown file: metadata plus the raw markdown body."""

    family: Family
    slug: str = Field(..., description="Filename without the markdown extension.")
    metadata: SerializeAsAny[ContentMetadata]
    body: str = Field("", description="Markdown after the front-matter block.")
    journey: Optional[str] = Field(
        None, description="Parent journey directory for learning items."
    )
    source_path: Optional[Path] = Field(None, exclude=True)

    model_config = ConfigDict(frozen=True)

    def to_payload(self, *, include_body: bool = True) -> Dict[str, Any]:
        """JSON-ready dict using the original front-matter key spelling."""

        payload: Dict[str, Any] = {
            "family": self.family,
            "slug": self.slug,
            "metadata": self.metadata.model_dump(
                mode="json", by_alias=True, exclude_none=True
            ),
        }
        if self.journey is not None:
            payload["journey"] = self.journey
        if include_body:
            payload["body"] = self.body
        return payload


@dataclass(frozen=True)
class FamilySpec:
    """Storage layout and schema for one content family."""

    name: Family
    grouping_depth: int
    metadata_model: Type[ContentMetadata]
    label: str

    @property
    def grouped(self) -> bool:
        return self.grouping_depth > 0


FAMILIES: Dict[str, FamilySpec] = {
    "posts": FamilySpec("posts", 0, PostMetadata, "Post"),
    "projects": FamilySpec("projects", 0, ProjectMetadata, "Project"),
    "learning": FamilySpec("learning", 1, LearningMetadata, "Learning post"),
}


def family_spec(family: str) -> FamilySpec:
    """Return the registry entry for a family or raise ``ValueError``."""

    try:
        return FAMILIES[family]
    except KeyError:
        known = ", ".join(FAMILIES)
        raise ValueError(f"Unknown content family '{family}' (expected one of: {known})") from None


__all__ = [
    "ContentItem",
    "ContentMetadata",
    "FAMILIES",
    "Family",
    "FamilySpec",
    "LearningMetadata",
    "PostMetadata",
    "ProjectMetadata",
    "family_spec",
]
