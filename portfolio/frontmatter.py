"""Split markdown files into a YAML front-matter mapping and a body."""

from __future__ import annotations

from typing import Any, Dict, Tuple

import yaml

DELIMITER = "---"


class FrontMatterError(ValueError):
    """The front-matter block is unterminated or not a YAML mapping."""


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def split_frontmatter(text: str) -> Tuple[Dict[str, Any], str]:
    """Return ``(metadata, body)`` for a markdown document.

    Text that does not open with a ``---`` line has no front-matter: the
    metadata is empty and the whole text is the body. Otherwise the block runs
    to the next ``---`` line and the body is everything after it, untouched.
    """

    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return {}, text

    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            raw = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        raise FrontMatterError("front-matter block is not terminated by '---'")

    if not raw.strip():
        return {}, body

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"invalid YAML in front-matter: {exc}") from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front-matter must be a mapping, got {type(data).__name__}"
        )
    return {str(key): value for key, value in data.items()}, body


__all__ = ["DELIMITER", "FrontMatterError", "split_frontmatter"]
