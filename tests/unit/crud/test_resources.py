"""Unit tests for crud/resources.py"""

from datetime import datetime

from mdsite.core.resource.origin import GeneratedOrigin
from mdsite.crud.resources import (
    commit_resource,
    get_all_records,
    get_by_collection,
    get_by_resource_id,
    list_collections,
)


def test_commit_creates_record(session, resource):
    record, status = commit_resource(session, resource, datetime(2024, 1, 2))
    assert status == "created"
    assert record.resource_id == resource.id
    assert record.collection == "posts"
    assert record.relative_path == "_posts/2023-5-1-hello.md"
    assert record.slug == "hello"
    assert record.title == "Hello"
    assert record.date == datetime(2023, 5, 1)
    assert record.url == "/2023/05/01/hello/"
    assert record.taxonomies == {"category": [], "tag": ["a", "b"]}
    assert record.built_at == datetime(2024, 1, 2)


def test_commit_unchanged(session, resource):
    commit_resource(session, resource)
    record, status = commit_resource(session, resource)
    assert status == "unchanged"
    assert len(get_all_records(session)) == 1


def test_commit_updated(session, resource):
    first, _ = commit_resource(session, resource)
    old_hash = first.hash
    resource.output = "<p>Changed</p>"
    record, status = commit_resource(session, resource)
    assert status == "updated"
    assert record.id == first.id
    assert record.hash != old_hash


def test_lookups(session, site, resource):
    page = site.collections["pages"].add(GeneratedOrigin("about.md", "pages", {}, "About"))
    commit_resource(session, resource)
    commit_resource(session, page)

    assert get_by_resource_id(session, page.id).slug == "about"
    assert get_by_resource_id(session, "missing") is None
    assert [r.slug for r in get_by_collection(session, "pages")] == ["about"]
    assert list_collections(session) == ["pages", "posts"]
    assert [r.relative_path for r in get_all_records(session)] == ["_posts/2023-5-1-hello.md", "about.md"]
