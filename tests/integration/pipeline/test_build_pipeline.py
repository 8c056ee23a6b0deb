"""Integration tests for the read -> transform -> write -> index pipeline.

Each test builds the small canonical site below and asserts stable expected
values. Read this file top-to-bottom as a reference for what each stage
produces with default settings.

Canonical site (src/)
---------------------
    _layouts/default.html   <html><title>{{ resource.title }}</title>{{ content }}</html>
    _data/authors.yml       ann: Ann Author
    _posts/2024-01-10-first-post.md
    _posts/2024-02-20-second-post.md   (tags: [python])
    _posts/2099-01-01-future.md        (future-dated, skipped)
    _posts/2024-03-01-draft.md         (published: false, skipped)
    index.md                           (pages collection)
    about/index.md                     (pages collection)
"""

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlmodel import Session, SQLModel

from mdsite.config import Settings
from mdsite.core.pipeline import run_build, run_read, run_transform, run_write
from mdsite.crud.resources import get_all_records, get_by_collection


FILES = {
    "_layouts/default.html": "<html><title>{{ resource.title }}</title>{{ content }}</html>",
    "_data/authors.yml": "ann: Ann Author\n",
    "_posts/2024-01-10-first-post.md": "---\nlayout: default\n---\nFirst body\n",
    "_posts/2024-02-20-second-post.md": "---\nlayout: default\ntags: [python]\n---\nBy {{ site.data.authors.ann }}\n",
    "_posts/2099-01-01-future.md": "Not yet\n",
    "_posts/2024-03-01-draft.md": "---\npublished: false\n---\nDraft\n",
    "index.md": "# Home\n",
    "about/index.md": "---\ntitle: About Us\n---\nAbout\n",
}


@pytest.fixture(name="root")
def root_fixture(tmp_path):
    for rel, text in FILES.items():
        path = tmp_path / "src" / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return tmp_path


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


def test_run_read_collects_every_collection(root):
    site = run_read(Settings(), root)
    posts = site.collections["posts"].resources
    assert [p.data["slug"] for p in posts] == ["first-post", "second-post", "draft", "future"]
    assert [str(p.relative_path) for p in site.collections["pages"].resources] == ["about/index.md", "index.md"]
    assert site.site_data().authors.ann == "Ann Author"
    assert set(site.layouts) == {"default"}


def test_run_read_missing_source(tmp_path):
    with pytest.raises(RuntimeError, match="Source directory not found"):
        run_read(Settings(), tmp_path)


def test_posts_are_linked_in_date_order(root):
    site = run_read(Settings(), root)
    first, second = site.collections["posts"].resources[:2]
    assert first.next_resource() is second
    assert second.previous_resource() is first
    assert first.previous_resource() is None


def test_run_transform_applies_layouts(root):
    site = run_read(Settings(), root)
    assert run_transform(site) == 6
    first = site.collections["posts"].resources[0]
    assert first.output == "<html><title>First Post</title><p>First body</p>\n</html>"


def test_run_write_skips_unpublished_and_future(root):
    site = run_read(Settings(), root)
    run_transform(site)
    written = run_write(site)
    paths = sorted(str(p.relative_to(site.dest_dir)) for _, p in written)
    assert paths == [
        "2024/01/10/first-post/index.html",
        "2024/02/20/second-post/index.html",
        "about/index.html",
        "index.html",
    ]
    assert (site.dest_dir / "index.html").read_text(encoding="utf-8") == "<h1>Home</h1>\n"


def test_run_build_future_flag(root):
    _, written, counts = run_build(Settings(future=True), root=root)
    assert len(written) == 5
    assert counts == {}


def test_run_build_indexes_written_resources(root, engine):
    _, written, counts = run_build(Settings(), engine, root)
    assert counts == {"created": 4, "updated": 0, "unchanged": 0}
    with Session(engine) as session:
        records = get_all_records(session)
        assert len(records) == len(written)
        posts = get_by_collection(session, "posts")
        assert [r.url for r in posts] == ["/2024/01/10/first-post/", "/2024/02/20/second-post/"]
        assert posts[1].taxonomies["tag"] == ["python"]
        assert posts[0].date == datetime(2024, 1, 10)


def test_run_build_rebuild_is_unchanged(root, engine):
    run_build(Settings(), engine, root)
    _, _, counts = run_build(Settings(), engine, root)
    assert counts == {"created": 0, "updated": 0, "unchanged": 4}


def test_run_build_detects_changes(root, engine):
    run_build(Settings(), engine, root)
    (root / "src" / "index.md").write_text("# Welcome\n", encoding="utf-8")
    _, _, counts = run_build(Settings(), engine, root)
    assert counts == {"created": 0, "updated": 1, "unchanged": 3}
