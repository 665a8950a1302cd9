"""Site configuration loaded from YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import family_spec

DEFAULT_CONFIG_PATH = Path("config/site.yaml")


class RoutePatterns(BaseModel):
    """URL patterns for one content family."""

    list: str = Field(..., description="Route for the family listing page.")
    detail: str = Field(
        ..., description="Route pattern for individual pages with {slug} (and {journey})."
    )
    journey: Optional[str] = Field(
        None, description="Route pattern for a journey overview page with {journey}."
    )


def _default_routes() -> dict[str, RoutePatterns]:
    return {
        "posts": RoutePatterns(list="/blog", detail="/blog/{slug}"),
        "projects": RoutePatterns(list="/projects", detail="/projects/{slug}"),
        "learning": RoutePatterns(
            list="/learning",
            detail="/learning/{journey}/{slug}",
            journey="/learning/{journey}",
        ),
    }


class SiteConfig(BaseModel):
    """Where content lives and how its pages are addressed."""

    content_root: Path = Field(
        Path("content"), alias="contentRoot", description="Directory holding every family."
    )
    posts_dir: str = Field("posts", alias="postsDir")
    projects_dir: str = Field("projects", alias="projectsDir")
    learning_dir: str = Field("learning", alias="learningDir")
    extension: str = Field(".md", description="Suffix of content files.")
    base_path: str = Field(
        "", alias="basePath", description="Prefix for every href, e.g. /website."
    )
    trailing_slash: bool = Field(True, alias="trailingSlash")
    static_pages: list[str] = Field(
        default_factory=lambda: ["/", "/about"],
        alias="staticPages",
        description="Pages that exist regardless of content.",
    )
    routes: dict[str, RoutePatterns] = Field(default_factory=_default_routes)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        if not value:
            raise ValueError("extension must not be empty")
        return value if value.startswith(".") else f".{value}"

    @field_validator("base_path")
    @classmethod
    def _normalize_base_path(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @field_validator("routes")
    @classmethod
    def _known_families(cls, value: dict[str, RoutePatterns]) -> dict[str, RoutePatterns]:
        for family in value:
            family_spec(family)
        merged = _default_routes()
        merged.update(value)
        return merged

    def family_root(self, family: str) -> Path:
        """Directory holding the given family's files."""

        directory = {
            "posts": self.posts_dir,
            "projects": self.projects_dir,
            "learning": self.learning_dir,
        }[family_spec(family).name]
        return self.content_root / directory


def load_config(path: Optional[Path] = None) -> SiteConfig:
    """Load a SiteConfig from YAML, or defaults when no path is given."""

    if path is None:
        return SiteConfig()
    if not path.exists():
        raise SystemExit(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise SystemExit(f"{path} must contain a mapping of settings.")
    try:
        return SiteConfig.model_validate(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid site config in {path}: {exc}") from exc


__all__ = ["DEFAULT_CONFIG_PATH", "RoutePatterns", "SiteConfig", "load_config"]
