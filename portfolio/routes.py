"""Static route planning for the exported site."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional

from .config import SiteConfig
from .io_utils import write_json_stable
from .models import ContentItem, family_spec
from .store import ContentStore


def _finalize(config: SiteConfig, path: str) -> str:
    """Apply the base path and trailing-slash policy to a site-relative path."""

    trimmed = path.strip("/")
    if not trimmed:
        return f"{config.base_path}/" if config.trailing_slash else (config.base_path or "/")
    href = f"{config.base_path}/{trimmed}"
    return f"{href}/" if config.trailing_slash else href


def page_href(config: SiteConfig, path: str) -> str:
    """Public href for a fixed page such as ``/about``."""

    return _finalize(config, path)


def list_href(config: SiteConfig, family: str) -> str:
    spec = family_spec(family)
    return _finalize(config, config.routes[spec.name].list)


def journey_href(config: SiteConfig, journey: str) -> str:
    pattern = config.routes["learning"].journey or "/learning/{journey}"
    return _finalize(config, pattern.replace("{journey}", journey))


def detail_href(
    config: SiteConfig, family: str, slug: str, journey: Optional[str] = None
) -> str:
    """Build a detail href by substituting slug and journey into the pattern."""

    spec = family_spec(family)
    pattern = config.routes[spec.name].detail
    if spec.grouped and journey is None:
        raise ValueError(f"A journey is required to link {spec.name} content.")
    href = pattern.replace("{slug}", slug)
    if journey is not None:
        href = href.replace("{journey}", journey)
    return _finalize(config, href)


def item_href(config: SiteConfig, item: ContentItem) -> str:
    return detail_href(config, item.family, item.slug, item.journey)


def static_params(store: ContentStore, family: str) -> list[Dict[str, str]]:
    """Parameters for every detail page the static export must render."""

    spec = family_spec(family)
    params: list[Dict[str, str]] = []
    for item in store.list_all(spec.name):
        if spec.grouped:
            params.append({"journey": item.journey or "", "slug": item.slug})
        else:
            params.append({"slug": item.slug})
    return params


def page_metadata(item: Optional[ContentItem], family: str) -> Dict[str, str]:
    """Title and description for a detail page, or a not-found title."""

    spec = family_spec(family)
    if item is None:
        return {"title": f"{spec.label} not found"}
    return {"title": item.metadata.title, "description": item.metadata.description}


def build_routes_payload(store: ContentStore, config: Optional[SiteConfig] = None) -> dict:
    """Describe every page of the site.

    {
      "pages": ["/", "/about/"],
      "families": {
        "posts": {"list": "/blog/", "content": {"hello": "/blog/hello/"}},
        "learning": {
          "list": "/learning/",
          "journeys": {"az-104": {"list": "/learning/az-104/", "content": {...}}}
        }
      }
    }
    """

    config = config or store.config
    families: dict[str, dict] = {}

    for name in ("posts", "projects"):
        families[name] = {
            "list": list_href(config, name),
            "content": {item.slug: item_href(config, item) for item in store.list_all(name)},
        }

    journeys: dict[str, dict] = {}
    for journey in store.list_journeys():
        journeys[journey] = {
            "list": journey_href(config, journey),
            "content": {
                item.slug: item_href(config, item)
                for item in store.list_all("learning", journey)
            },
        }
    families["learning"] = {"list": list_href(config, "learning"), "journeys": journeys}

    return {
        "basePath": config.base_path,
        "pages": [page_href(config, page) for page in config.static_pages],
        "families": families,
    }


def write_routes_payload(payload: dict, targets: Iterable[Path]) -> list[Path]:
    """Write routes.json to every distinct target, in the content index's JSON style."""

    unique = dict.fromkeys(Path(path) for path in targets)
    return [write_json_stable(target, payload) for target in unique]


__all__ = [
    "build_routes_payload",
    "detail_href",
    "item_href",
    "journey_href",
    "list_href",
    "page_href",
    "page_metadata",
    "static_params",
    "write_routes_payload",
]
