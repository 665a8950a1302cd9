import datetime as dt
import logging
from pathlib import Path

import pytest
import yaml

from portfolio.errors import NotFoundError, ReadError
from portfolio.store import ContentStore, partition_featured


def _write_item(directory: Path, slug: str, body: str = "Body\n", **front: object) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    header = yaml.safe_dump(front, sort_keys=False, allow_unicode=True)
    path = directory / f"{slug}.md"
    path.write_text(f"---\n{header}---\n{body}", encoding="utf-8")
    return path


@pytest.fixture()
def content_root(tmp_path: Path) -> Path:
    return tmp_path / "content"


@pytest.fixture()
def store(content_root: Path) -> ContentStore:
    return ContentStore.at(content_root)


def test_round_trip_preserves_metadata_and_body(store: ContentStore, content_root: Path) -> None:
    _write_item(content_root / "posts", "hello", body="Hello", title="X", date="2025-01-01", tags=["a", "b"])

    item = store.get_by_slug("posts", "hello")

    assert item is not None
    assert item.slug == "hello"
    assert item.family == "posts"
    assert item.metadata.title == "X"
    assert item.metadata.tags == ["a", "b"]
    assert item.metadata.date == dt.date(2025, 1, 1)
    assert item.body == "Hello"
    assert item.journey is None


def test_lookup_ignores_markdown_extension(store: ContentStore, content_root: Path) -> None:
    _write_item(content_root / "projects", "scanner", title="Scanner", date="2025-07-20")

    assert store.get_by_slug("projects", "scanner.md") == store.get_by_slug("projects", "scanner")
    assert store.get_by_slug("projects", "scanner.md").slug == "scanner"


def test_list_all_sorts_newest_first(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    _write_item(posts, "first", title="March", date="2025-03-01")
    _write_item(posts, "second", title="January", date="2025-01-01")
    _write_item(posts, "third", title="February", date="2025-02-01")

    dates = [item.metadata.date.isoformat() for item in store.list_all("posts")]

    assert dates == ["2025-03-01", "2025-02-01", "2025-01-01"]


def test_equal_dates_keep_discovery_order(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    _write_item(posts, "a", title="A", date="2025-01-01")
    _write_item(posts, "b", title="B", date="2025-01-01")
    _write_item(posts, "c", title="C", date="2025-02-01")

    assert [item.slug for item in store.list_all("posts")] == ["c", "a", "b"]


def test_malformed_file_is_skipped_and_logged(
    store: ContentStore, content_root: Path, caplog: pytest.LogCaptureFixture
) -> None:
    posts = content_root / "posts"
    for index in range(3):
        _write_item(posts, f"ok-{index}", title=f"Post {index}", date=f"2025-01-0{index + 1}")
    (posts / "broken.md").write_text("---\ntitle: Broken\nno closing delimiter\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="portfolio.store"):
        items = store.list_all("posts")

    assert len(items) == 3
    assert "broken" not in {item.slug for item in items}
    assert "broken.md" in caplog.text


def test_unparseable_date_excludes_item(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    _write_item(posts, "dated", title="Dated", date="2025-01-01")
    _write_item(posts, "undated", title="Undated", date="someday")

    assert [item.slug for item in store.list_all("posts")] == ["dated"]
    assert store.get_by_slug("posts", "undated") is None
    with pytest.raises(ReadError) as excinfo:
        store.load("posts", "undated")
    assert excinfo.value.path.name == "undated.md"


def test_undated_item_loads_and_sorts_last(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    _write_item(posts, "newer", title="Newer", date="2025-02-01")
    _write_item(posts, "nodate", title="No date")
    _write_item(posts, "older", title="Older", date="2025-01-01")

    assert [item.slug for item in store.list_all("posts")] == ["newer", "older", "nodate"]
    item = store.get_by_slug("posts", "nodate")
    assert item is not None
    assert item.metadata.date is None


def test_file_without_front_matter_still_loads(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    _write_item(posts, "dated", title="Dated", date="2025-01-01")
    (posts / "plain.md").write_text("# Just markdown\n", encoding="utf-8")

    items = store.list_all("posts")

    assert [item.slug for item in items] == ["dated", "plain"]
    plain = items[1]
    assert plain.metadata.title == ""
    assert plain.metadata.description == ""
    assert plain.metadata.tags == []
    assert plain.metadata.date is None
    assert plain.body == "# Just markdown\n"


def test_non_utf8_file_is_a_read_error(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    posts.mkdir(parents=True)
    (posts / "binary.md").write_bytes(b"\xff\xfe\x00\x01")

    with pytest.raises(ReadError):
        store.load("posts", "binary")
    assert store.list_all("posts") == []


def test_missing_optional_fields_surface_as_empty(store: ContentStore, content_root: Path) -> None:
    _write_item(content_root / "posts", "bare", date="2025-05-05")

    item = store.get_by_slug("posts", "bare")

    assert item is not None
    assert item.metadata.title == ""
    assert item.metadata.description == ""
    assert item.metadata.tags == []


def test_missing_directories_are_empty(tmp_path: Path) -> None:
    store = ContentStore.at(tmp_path / "does-not-exist")

    assert store.list_slugs("posts") == []
    assert store.list_all("projects") == []
    assert store.list_journeys() == []
    assert store.list_all_learning_across_journeys() == []
    assert store.list_all("learning", "az-104") == []


def test_unknown_slug_is_not_found(store: ContentStore, content_root: Path) -> None:
    (content_root / "projects").mkdir(parents=True)

    assert store.get_by_slug("projects", "nonexistent") is None
    with pytest.raises(NotFoundError):
        store.load("projects", "nonexistent")
    with pytest.raises(LookupError):
        store.load("projects", "nonexistent")


def test_slugs_cannot_escape_the_family_directory(store: ContentStore, content_root: Path) -> None:
    _write_item(content_root, "secret", title="Secret", date="2025-01-01")
    (content_root / "posts").mkdir(parents=True)

    assert store.get_by_slug("posts", "../secret") is None
    assert store.get_by_slug("learning", "secret", journey="..") is None


def test_discovery_lists_markdown_files_in_name_order(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    _write_item(posts, "beta", title="Beta", date="2025-01-01")
    _write_item(posts, "alpha", title="Alpha", date="2025-02-01")
    (posts / "notes.txt").write_text("not content", encoding="utf-8")
    (posts / "drafts").mkdir()
    (posts / "folder.md").mkdir()

    assert store.list_slugs("posts") == ["alpha", "beta"]


@pytest.mark.parametrize("name", [".md", "..md", "a\\b.md"])
def test_unusable_filenames_are_ignored(
    store: ContentStore, content_root: Path, caplog: pytest.LogCaptureFixture, name: str
) -> None:
    posts = content_root / "posts"
    _write_item(posts, "good", title="Good", date="2025-01-01")
    (posts / name).write_text("---\ntitle: Odd\ndate: 2025-02-01\n---\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="portfolio.store"):
        slugs = store.list_slugs("posts")
        items = store.list_all("posts")

    assert slugs == ["good"]
    assert [item.slug for item in items] == ["good"]
    assert name in caplog.text


def test_file_removed_after_discovery_is_recorded(
    store: ContentStore, content_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_item(content_root / "posts", "kept", title="Kept", date="2025-01-01")
    monkeypatch.setattr(store, "list_slugs", lambda family, journey=None: ["gone", "kept"])

    results = store.scan("posts")

    assert [result.slug for result in results] == ["gone", "kept"]
    assert isinstance(results[0].error, NotFoundError)
    assert results[1].ok
    assert [item.slug for item in store.list_all("posts")] == ["kept"]


def test_learning_lookup_requires_a_journey(store: ContentStore, content_root: Path) -> None:
    _write_item(content_root / "learning" / "az-104", "identity", title="Identity", date="2025-01-01")

    with pytest.raises(ValueError):
        store.get_by_slug("learning", "identity")


def test_learning_journeys(store: ContentStore, content_root: Path) -> None:
    learning = content_root / "learning"
    _write_item(learning / "az-104", "identity", title="Identity", date="2025-06-10", status="completed")
    _write_item(learning / "az-104", "networking", title="Networking", date="2025-07-01")
    (learning / "malware-reversing").mkdir(parents=True)
    (learning / "README.md").write_text("not a journey", encoding="utf-8")

    assert store.list_journeys() == ["az-104", "malware-reversing"]
    assert store.list_slugs("learning", "malware-reversing") == []
    assert store.list_slugs("learning", "az-104") == ["identity", "networking"]

    across = store.list_all_learning_across_journeys()
    assert [item.slug for item in across] == ["networking", "identity"]
    assert {item.journey for item in across} == {"az-104"}
    assert store.list_all("learning") == across

    item = store.get_learning_post("az-104", "identity.md")
    assert item is not None
    assert item.journey == "az-104"
    assert item.metadata.status == "completed"


def test_learning_items_sort_across_journeys(store: ContentStore, content_root: Path) -> None:
    learning = content_root / "learning"
    _write_item(learning / "appsec-labs", "xss", title="XSS", date="2025-03-01")
    _write_item(learning / "az-104", "identity", title="Identity", date="2025-04-01")
    _write_item(learning / "az-104", "storage", title="Storage", date="2025-02-01")

    assert [(item.journey, item.slug) for item in store.list_all_learning_across_journeys()] == [
        ("az-104", "identity"),
        ("appsec-labs", "xss"),
        ("az-104", "storage"),
    ]


def test_journey_argument_must_match_family(store: ContentStore) -> None:
    with pytest.raises(ValueError):
        store.list_slugs("learning")
    with pytest.raises(ValueError):
        store.list_slugs("posts", "az-104")
    with pytest.raises(ValueError):
        store.list_all("videos")


def test_family_views(store: ContentStore, content_root: Path) -> None:
    _write_item(content_root / "posts", "post", title="Post", date="2025-01-01")
    _write_item(content_root / "projects", "project", title="Project", date="2025-01-01")
    _write_item(content_root / "learning" / "az-104", "lesson", title="Lesson", date="2025-01-01")

    assert store.get_post("post").metadata.title == "Post"
    assert store.get_project("project").metadata.title == "Project"
    assert [item.slug for item in store.all_posts()] == ["post"]
    assert [item.slug for item in store.all_projects()] == ["project"]
    assert [item.slug for item in store.all_learning_posts("az-104")] == ["lesson"]


def test_partition_featured_preserves_order(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    _write_item(posts, "a", title="A", date="2025-04-01", featured=True)
    _write_item(posts, "b", title="B", date="2025-03-01")
    _write_item(posts, "c", title="C", date="2025-02-01", featured=True)

    featured, regular = partition_featured(store.list_all("posts"))

    assert [item.slug for item in featured] == ["a", "c"]
    assert [item.slug for item in regular] == ["b"]


def test_reads_are_fresh_on_every_query(store: ContentStore, content_root: Path) -> None:
    posts = content_root / "posts"
    _write_item(posts, "one", title="Original", date="2025-01-01")
    assert store.get_by_slug("posts", "one").metadata.title == "Original"

    _write_item(posts, "one", title="Edited", date="2025-01-01")
    _write_item(posts, "two", title="New", date="2025-01-02")

    assert store.get_by_slug("posts", "one").metadata.title == "Edited"
    assert [item.slug for item in store.list_all("posts")] == ["two", "one"]
