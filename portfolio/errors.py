"""Error types raised by the content store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ContentError(Exception):
    """Base class for content store failures."""


class NotFoundError(ContentError, LookupError):
    """Requested slug or journey does not exist."""

    def __init__(self, family: str, slug: str, journey: Optional[str] = None) -> None:
        self.family = family
        self.slug = slug
        self.journey = journey
        location = f"{journey}/{slug}" if journey else slug
        super().__init__(f"No {family} item named '{location}'")


class ReadError(ContentError):
    """A single content file could not be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


__all__ = ["ContentError", "NotFoundError", "ReadError"]
