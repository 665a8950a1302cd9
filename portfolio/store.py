"""Read-only store over the markdown content tree.

Every query re-reads the filesystem and builds fresh records, so callers can
run listings in parallel page builds without sharing state.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError

from .config import SiteConfig
from .errors import ContentError, NotFoundError, ReadError
from .frontmatter import FrontMatterError, split_frontmatter
from .models import ContentItem, FamilySpec, family_spec

logger = logging.getLogger(__name__)


def sort_by_date(items: Iterable[ContentItem]) -> list[ContentItem]:
    """Newest first, undated items last; ties keep their discovery order."""

    return sorted(
        items,
        key=lambda item: (item.metadata.date is not None, item.metadata.date or dt.date.min),
        reverse=True,
    )


def partition_featured(
    items: Iterable[ContentItem],
) -> Tuple[list[ContentItem], list[ContentItem]]:
    """Split items into (featured, regular), preserving order."""

    featured: list[ContentItem] = []
    regular: list[ContentItem] = []
    for item in items:
        if getattr(item.metadata, "featured", False):
            featured.append(item)
        else:
            regular.append(item)
    return featured, regular


def _is_safe_segment(value: str) -> bool:
    return bool(value) and value not in {".", ".."} and "/" not in value and "\\" not in value


@dataclass
class ScanResult:
    """Outcome of loading one discovered file."""

    family: str
    slug: str
    journey: Optional[str]
    item: Optional[ContentItem] = None
    error: Optional[ContentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ContentStore:
    """Discovers, parses and lists content for every family."""

    def __init__(self, config: Optional[SiteConfig] = None) -> None:
        self.config = config or SiteConfig()

    @classmethod
    def at(cls, content_root: Path) -> "ContentStore":
        """Store rooted at ``content_root`` with otherwise default settings."""

        return cls(SiteConfig(content_root=Path(content_root)))

    # Discovery

    def _directory(self, spec: FamilySpec, journey: Optional[str]) -> Path:
        root = self.config.family_root(spec.name)
        if spec.grouped:
            if journey is None:
                raise ValueError(f"A journey is required to address {spec.name} content.")
            return root / journey
        if journey is not None:
            raise ValueError(f"{spec.name} content is not grouped by journey.")
        return root

    def _strip_extension(self, slug: str) -> str:
        extension = self.config.extension
        if slug.endswith(extension):
            return slug[: -len(extension)]
        return slug

    def list_journeys(self) -> list[str]:
        """Journey directory names under the learning root."""

        root = self.config.family_root("learning")
        if not root.is_dir():
            return []
        return [path.name for path in sorted(root.iterdir()) if path.is_dir()]

    def list_slugs(self, family: str, journey: Optional[str] = None) -> list[str]:
        """Slugs in discovery (filename) order; missing directories are empty."""

        spec = family_spec(family)
        if journey is not None and spec.grouped and not _is_safe_segment(journey):
            return []
        directory = self._directory(spec, journey)
        if not directory.is_dir():
            return []

        extension = self.config.extension
        slugs: list[str] = []
        for path in sorted(directory.iterdir()):
            if not (path.is_file() and path.name.endswith(extension)):
                continue
            slug = path.name[: -len(extension)]
            if not _is_safe_segment(slug):
                logger.warning("Ignoring %s: name cannot be used as a slug", path)
                continue
            slugs.append(slug)
        return slugs

    # Parsing

    def _parse_file(
        self, spec: FamilySpec, slug: str, journey: Optional[str], path: Path
    ) -> ContentItem:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(path, f"cannot read file: {exc}") from exc

        try:
            data, body = split_frontmatter(text)
        except FrontMatterError as exc:
            raise ReadError(path, str(exc)) from exc

        try:
            metadata = spec.metadata_model.model_validate(data)
        except ValidationError as exc:
            raise ReadError(path, f"invalid front-matter: {exc}") from exc

        return ContentItem(
            family=spec.name,
            slug=slug,
            metadata=metadata,
            body=body,
            journey=journey,
            source_path=path,
        )

    def load(self, family: str, slug: str, journey: Optional[str] = None) -> ContentItem:
        """Load one item, raising NotFoundError or ReadError."""

        spec = family_spec(family)
        real_slug = self._strip_extension(slug)
        if not _is_safe_segment(real_slug) or (
            journey is not None and not _is_safe_segment(journey)
        ):
            raise NotFoundError(spec.name, real_slug, journey)

        path = self._directory(spec, journey) / f"{real_slug}{self.config.extension}"
        if not path.is_file():
            raise NotFoundError(spec.name, real_slug, journey)
        return self._parse_file(spec, real_slug, journey, path)

    def get_by_slug(
        self, family: str, slug: str, journey: Optional[str] = None
    ) -> Optional[ContentItem]:
        """Exact-match lookup; returns None when missing or unreadable.

        Learning items need their journey: omitting it raises ValueError rather
        than returning None.
        """

        try:
            return self.load(family, slug, journey)
        except NotFoundError as exc:
            logger.debug("%s", exc)
        except ReadError as exc:
            logger.warning("Skipping unreadable %s item: %s", family, exc)
        return None

    # Listings

    def scan(self, family: str, journey: Optional[str] = None) -> List[ScanResult]:
        """Load every discovered file, recording failures instead of raising."""

        spec = family_spec(family)
        if spec.grouped and journey is None:
            journeys = self.list_journeys()
        else:
            journeys = [journey]

        results: List[ScanResult] = []
        for current in journeys:
            for slug in self.list_slugs(spec.name, current):
                result = ScanResult(family=spec.name, slug=slug, journey=current)
                try:
                    result.item = self.load(spec.name, slug, current)
                except ContentError as exc:
                    result.error = exc
                results.append(result)
        return results

    def list_all(self, family: str, journey: Optional[str] = None) -> list[ContentItem]:
        """Parseable items sorted by date, newest first."""

        items: list[ContentItem] = []
        for result in self.scan(family, journey):
            if result.error is not None:
                logger.warning("Skipping unreadable %s item: %s", result.family, result.error)
                continue
            items.append(result.item)
        return sort_by_date(items)

    def list_all_learning_across_journeys(self) -> list[ContentItem]:
        """Every learning item from every journey, newest first."""

        items: list[ContentItem] = []
        for journey in self.list_journeys():
            items.extend(self.list_all("learning", journey))
        return sort_by_date(items)

    # Family views

    def get_post(self, slug: str) -> Optional[ContentItem]:
        return self.get_by_slug("posts", slug)

    def get_project(self, slug: str) -> Optional[ContentItem]:
        return self.get_by_slug("projects", slug)

    def get_learning_post(self, journey: str, slug: str) -> Optional[ContentItem]:
        return self.get_by_slug("learning", slug, journey)

    def all_posts(self) -> list[ContentItem]:
        return self.list_all("posts")

    def all_projects(self) -> list[ContentItem]:
        return self.list_all("projects")

    def all_learning_posts(self, journey: str) -> list[ContentItem]:
        return self.list_all("learning", journey)


__all__ = ["ContentStore", "ScanResult", "partition_featured", "sort_by_date"]
