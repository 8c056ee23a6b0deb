"""Capability mixins composed into Resource: ordering, publishing, layouts, rendering"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from mdsite.core.models import Layout
from mdsite.core.utils.dates import to_datetime

if TYPE_CHECKING:
    from mdsite.core.resource.base import Resource


logger = logging.getLogger(__name__)


def _cmp(a: Any, b: Any) -> Optional[int]:
    """Three-way compare; None when the values cannot be ordered."""
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        if a == b:
            return 0
    except TypeError:
        return None
    return None


class Orderable:
    """Date-then-path total order and sibling navigation within a collection.

    Equality stays identity; only the ordering operators are defined.
    """

    def compare(self, other: Any) -> Optional[int]:
        """-1, 0 or 1 against another resource; None if other is not a resource."""
        if not isinstance(other, Orderable):
            return None

        mine, theirs = to_datetime(self.data.get("date")), to_datetime(other.data.get("date"))
        if mine is not None and theirs is not None:
            result = _cmp(mine, theirs)
        else:
            result = _cmp(self.data.get("date"), other.data.get("date"))
        # equal or unorderable dates fall back to the path
        if not result:
            result = _cmp(self.path, other.path)
        return result

    def __lt__(self, other):
        result = self.compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other):
        result = self.compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other):
        result = self.compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other):
        result = self.compare(other)
        return NotImplemented if result is None else result >= 0

    def _position(self) -> Optional[int]:
        for i, item in enumerate(self.collection.resources):
            if item is self:
                return i
        return None

    def next_resource(self) -> Optional["Resource"]:
        resources = self.collection.resources
        pos = self._position()
        if pos is not None and pos < len(resources) - 1:
            return resources[pos + 1]
        return None

    def previous_resource(self) -> Optional["Resource"]:
        pos = self._position()
        if pos:
            return self.collection.resources[pos - 1]
        return None

    next_doc = next_resource
    previous_doc = previous_resource


class Publishable:
    """Write eligibility: needs a destination and the site's publisher approval."""

    def write_allowed(self) -> bool:
        return self.requires_destination() and self.site.publisher.publish(self)


class LayoutPlaceable:
    """Memoized lookup of the layout named in data.layout."""

    _layout: Optional[Layout] = None

    def no_layout(self) -> bool:
        name = self.data.get("layout")
        return name in (None, "", False, "none")

    @property
    def layout(self) -> Optional[Layout]:
        if self._layout is not None:
            return self._layout
        if self.no_layout():
            return None

        name = self.data.get("layout")
        self._layout = self.site.layouts.get(name)
        if self._layout is None:
            logger.warning("Layout '%s' requested via %s does not exist.", name, self.relative_path)
        return self._layout


def _sibling_drop(resource: Optional["Resource"]) -> Optional["ResourceDrop"]:
    return resource.to_liquid() if resource is not None else None


class ResourceDrop:
    """Read-only template view of a resource; unknown keys fall back to its data."""

    FIELDS = {
        "id":                lambda r: r.id,
        "url":               lambda r: r.relative_url,
        "relative_url":      lambda r: r.relative_url,
        "absolute_url":      lambda r: r.absolute_url,
        "relative_path":     lambda r: str(r.relative_path),
        "path":              lambda r: r.path,
        "collection":        lambda r: r.collection.label,
        "date":              lambda r: r.date,
        "data":              lambda r: r.data,
        "taxonomies":        lambda r: r.taxonomies,
        "content":           lambda r: r.content,
        "summary":           lambda r: r.summary,
        "next_resource":     lambda r: _sibling_drop(r.next_resource()),
        "previous_resource": lambda r: _sibling_drop(r.previous_resource()),
    }

    def __init__(self, resource: "Resource"):
        self._resource = resource

    def get(self, key: str, default: Any = None) -> Any:
        if key in self.FIELDS:
            return self.FIELDS[key](self._resource)
        return self._resource.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __repr__(self) -> str:
        return f"<ResourceDrop {self._resource.id}>"


class Renderable:
    """Template-layer view of a resource."""

    _drop: Optional[ResourceDrop] = None

    def to_liquid(self) -> ResourceDrop:
        if self._drop is None:
            self._drop = ResourceDrop(self)
        return self._drop
