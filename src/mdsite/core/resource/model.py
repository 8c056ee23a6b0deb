"""Model: binds an origin to its site and collection"""

from typing import TYPE_CHECKING, Any, Optional

from mdsite.core.resource.origin import Origin

if TYPE_CHECKING:
    from mdsite.core.site import Collection, Site


class Model:
    """Reads an origin once and exposes its raw data and body."""

    def __init__(self, origin: Origin, site: "Site"):
        self.origin = origin
        self.site = site
        self._raw: Optional[tuple[dict[str, Any], Optional[str]]] = None

    @property
    def collection(self) -> "Collection":
        return self.site.collections[self.origin.collection_label]

    def _load(self) -> tuple[dict[str, Any], Optional[str]]:
        if self._raw is None:
            self._raw = self.origin.read()
        return self._raw

    @property
    def data_attributes(self) -> dict[str, Any]:
        """A fresh copy of the origin's front matter/data."""
        return dict(self._load()[0])

    @property
    def content(self) -> Optional[str]:
        return self._load()[1]

    def __str__(self) -> str:
        return f"model {self.origin.id}"
