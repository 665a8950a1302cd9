"""Write and compare a JSON index of all site content."""

from __future__ import annotations

import difflib
from pathlib import Path

from .io_utils import stable_json_dumps, write_json_stable
from .store import ContentStore


def build_content_index(store: ContentStore, *, include_body: bool = False) -> dict:
    """Sorted listings for every family, keyed the way pages consume them."""

    journeys = {
        journey: [
            item.to_payload(include_body=include_body)
            for item in store.list_all("learning", journey)
        ]
        for journey in store.list_journeys()
    }
    return {
        "posts": [item.to_payload(include_body=include_body) for item in store.list_all("posts")],
        "projects": [
            item.to_payload(include_body=include_body) for item in store.list_all("projects")
        ],
        "learning": {
            "journeys": journeys,
            "recent": [
                {"journey": item.journey, "slug": item.slug}
                for item in store.list_all_learning_across_journeys()
            ],
        },
    }


def write_content_index(path: Path, index: dict) -> Path:
    return write_json_stable(path, index)


def diff_content_index(path: Path, index: dict) -> str:
    """Unified diff between the index on disk and ``index``; empty when equal."""

    current = path.read_text(encoding="utf-8").splitlines(keepends=True) if path.exists() else []
    expected = stable_json_dumps(index).splitlines(keepends=True)
    if current == expected:
        return ""
    return "".join(
        difflib.unified_diff(
            current,
            expected,
            fromfile=f"{path.name} (on disk)",
            tofile=f"{path.name} (from content)",
        )
    )


__all__ = ["build_content_index", "diff_content_index", "write_content_index"]
