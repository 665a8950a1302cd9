"""Command-line interface for the portfolio content store."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .config import DEFAULT_CONFIG_PATH, SiteConfig, load_config
from .errors import ContentError
from .io_utils import warn
from .models import FAMILIES, ContentItem
from .routes import build_routes_payload, write_routes_payload
from .snapshot import build_content_index, diff_content_index, write_content_index
from .store import ContentStore

VERSION = "0.1.0"


def _load_site_config(args: argparse.Namespace) -> SiteConfig:
    if args.config:
        config = load_config(Path(args.config))
    elif DEFAULT_CONFIG_PATH.exists():
        config = load_config(DEFAULT_CONFIG_PATH)
    else:
        config = SiteConfig()
    if args.content:
        config = config.model_copy(update={"content_root": Path(args.content)})
    return config


def _store(args: argparse.Namespace) -> ContentStore:
    return ContentStore(_load_site_config(args))


def _item_line(item: ContentItem) -> str:
    slug = f"{item.journey}/{item.slug}" if item.journey else item.slug
    date = item.metadata.date.isoformat() if item.metadata.date else "----------"
    return f"{date}  {slug}  {item.metadata.title}"


def _handle_journeys(args: argparse.Namespace) -> None:
    for journey in _store(args).list_journeys():
        print(journey)


def _handle_list(args: argparse.Namespace) -> None:
    store = _store(args)
    if args.journey and not FAMILIES[args.family].grouped:
        raise SystemExit(f"--journey only applies to learning content, not {args.family}.")

    items = store.list_all(args.family, args.journey)
    for item in items:
        print(_item_line(item))


def _handle_show(args: argparse.Namespace) -> None:
    store = _store(args)
    if FAMILIES[args.family].grouped and not args.journey:
        raise SystemExit("--journey is required to show learning content.")
    try:
        item = store.load(args.family, args.slug, args.journey)
    except ContentError as exc:
        raise SystemExit(str(exc)) from exc

    payload = item.to_payload(include_body=args.body)
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _handle_validate(args: argparse.Namespace) -> None:
    store = _store(args)
    errors: list[str] = []
    validated = 0

    for family in FAMILIES:
        for result in store.scan(family):
            if result.error is not None:
                errors.append(str(result.error))
            else:
                validated += 1

    if errors:
        for message in errors:
            warn(message)
        raise SystemExit(1)

    print(
        f"Validated {validated} content items across {len(FAMILIES)} families "
        f"in {store.config.content_root}."
    )


def _handle_routes(args: argparse.Namespace) -> None:
    store = _store(args)
    payload = build_routes_payload(store)
    written = write_routes_payload(payload, [Path(args.out)])
    print(f"Wrote routes to {', '.join(str(path) for path in written)}.")


def _handle_index(args: argparse.Namespace) -> None:
    store = _store(args)
    out_path = Path(args.out)
    index = build_content_index(store, include_body=args.body)

    if args.check:
        diff = diff_content_index(out_path, index)
        if diff:
            sys.stderr.write(diff)
            raise SystemExit(1)
        print(f"{out_path} is up to date.")
        return

    write_content_index(out_path, index)
    print(f"Wrote content index to {out_path}.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio",
        description="Content utilities for the portfolio site",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"portfolio {VERSION}",
        help="Show the portfolio version and exit.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the site config YAML (default: {DEFAULT_CONFIG_PATH} if present).",
    )
    parser.add_argument(
        "--content",
        default=None,
        help="Content root directory; overrides the config file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug diagnostics to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command")

    journeys_parser = subparsers.add_parser(
        "journeys",
        help="List learning journeys.",
        description="Print every journey directory under the learning root.",
    )
    journeys_parser.set_defaults(func=_handle_journeys)

    list_parser = subparsers.add_parser(
        "list",
        help="List content newest first.",
        description="Print date, slug and title for every readable item in a family.",
    )
    list_parser.add_argument("family", choices=sorted(FAMILIES), help="Content family.")
    list_parser.add_argument(
        "--journey",
        default=None,
        help="Restrict learning content to one journey.",
    )
    list_parser.set_defaults(func=_handle_list)

    show_parser = subparsers.add_parser(
        "show",
        help="Show one item as JSON.",
        description="Print the parsed metadata (and optionally body) of one item.",
    )
    show_parser.add_argument("family", choices=sorted(FAMILIES), help="Content family.")
    show_parser.add_argument("slug", help="Item slug, with or without the extension.")
    show_parser.add_argument("--journey", default=None, help="Journey of a learning item.")
    show_parser.add_argument(
        "--body",
        action="store_true",
        help="Include the markdown body in the output.",
    )
    show_parser.set_defaults(func=_handle_show)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check every content file parses.",
        description="Parse every discovered file and report the ones that fail.",
    )
    validate_parser.set_defaults(func=_handle_validate)

    routes_parser = subparsers.add_parser(
        "routes",
        help="Write routes.json for the static export.",
        description="Describe every page of the site as JSON.",
    )
    routes_parser.add_argument(
        "--out",
        default="routes.json",
        help="Path to write routes JSON.",
    )
    routes_parser.set_defaults(func=_handle_routes)

    index_parser = subparsers.add_parser(
        "index",
        help="Write a JSON index of all content.",
        description="Write sorted listings for every family as stable JSON.",
    )
    index_parser.add_argument("--out", required=True, help="Path to the index JSON.")
    index_parser.add_argument(
        "--body",
        action="store_true",
        help="Include markdown bodies in the index.",
    )
    index_parser.add_argument(
        "--check",
        action="store_true",
        help="Compare the existing index with fresh content and fail on drift.",
    )
    index_parser.set_defaults(func=_handle_index)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
