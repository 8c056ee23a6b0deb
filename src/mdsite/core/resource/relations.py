"""Cross-collection relations declared in collection config"""

from typing import TYPE_CHECKING, Any, Optional

from mdsite.core.resource.taxonomy import as_list

if TYPE_CHECKING:
    from mdsite.core.resource.base import Resource


class Relations:
    """belongs_to / has_many lookups for one resource.

    belongs_to: {name: collection} -- data[name] holds the slug(s) of the target.
    has_many:   {name: collection} -- targets point back at this resource's slug
    under the singular form of this resource's collection label.
    """

    def __init__(self, resource: "Resource"):
        self._resource = resource

    @property
    def schema(self) -> dict[str, dict[str, str]]:
        return self._resource.collection.config.relations

    @property
    def relation_types(self) -> list[str]:
        return [name for kind in self.schema.values() for name in kind]

    def _collection(self, label: str):
        return self._resource.site.collections.get(label)

    def _belongs_to(self, name: str, label: str) -> Any:
        collection = self._collection(label)
        value = self._resource.data.get(name)
        if collection is None or value is None:
            return None
        by_slug = {r.data.get("slug"): r for r in collection.resources}
        if isinstance(value, (list, tuple)):
            return [by_slug[v] for v in value if v in by_slug]
        return by_slug.get(value)

    def _has_many(self, label: str) -> list["Resource"]:
        collection = self._collection(label)
        if collection is None:
            return []
        owner_key = self._resource.collection.label.removesuffix("s")
        slug = self._resource.data.get("slug")
        return [r for r in collection.resources if slug in as_list(r.data.get(owner_key))]

    def get(self, name: str) -> Optional[Any]:
        belongs_to = self.schema.get("belongs_to", {})
        has_many = self.schema.get("has_many", {})
        if name in belongs_to:
            return self._belongs_to(name, belongs_to[name])
        if name in has_many:
            return self._has_many(has_many[name])
        raise AttributeError(f"{self._resource.collection.label} has no relation '{name}'")

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Relation name -> related resource ids."""
        result = {}
        for name in self.relation_types:
            related = self.get(name)
            if isinstance(related, list):
                result[name] = [r.id for r in related]
            else:
                result[name] = related.id if related is not None else None
        return result
