"""Unit tests for cross-collection relations"""

import pytest

from mdsite.config import CollectionConfig, Settings
from mdsite.core.resource.origin import GeneratedOrigin
from mdsite.core.site import Site


@pytest.fixture(name="site")
def site_fixture(tmp_path):
    settings = Settings(collections={
        "posts": CollectionConfig(relations={"belongs_to": {"author": "authors"}}),
        "authors": CollectionConfig(relations={"has_many": {"posts": "posts"}}),
    })
    site = Site(settings, root=tmp_path)
    site.collections["authors"].add(GeneratedOrigin("_authors/ann.md", "authors", {}, ""))
    site.collections["authors"].add(GeneratedOrigin("_authors/bob.md", "authors", {}, ""))
    site.collections["posts"].add(GeneratedOrigin("_posts/one.md", "posts", {"author": "ann"}, ""))
    site.collections["posts"].add(GeneratedOrigin("_posts/two.md", "posts", {"author": "ann"}, ""))
    site.collections["posts"].add(GeneratedOrigin("_posts/three.md", "posts", {"author": "bob"}, ""))
    return site


def test_belongs_to(site):
    one = site.collections["posts"].resources[0]
    ann = site.collections["authors"].resources[0]
    assert one.relations.author is ann


def test_has_many(site):
    ann, bob = site.collections["authors"].resources
    assert [p.data.slug for p in ann.relations.posts] == ["one", "two"]
    assert [p.data.slug for p in bob.relations.get("posts")] == ["three"]


def test_relations_memoized(site):
    one = site.collections["posts"].resources[0]
    assert one.relations is one.relations


def test_unknown_relation_raises(site):
    one = site.collections["posts"].resources[0]
    with pytest.raises(AttributeError):
        one.relations.editor


def test_relations_to_dict(site):
    one = site.collections["posts"].resources[0]
    ann = site.collections["authors"].resources[0]
    assert one.relations.to_dict() == {"author": ann.id}
