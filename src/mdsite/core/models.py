"""Data models shared by the resource pipeline"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from mdsite.core.utils.dotdict import DotDict


Resolver = Callable[[str], Any]


class ResourceData(DotDict):
    """Resource front matter with a fallback chain for missing keys.

    `get(key)` returns the stored value if the key is present, otherwise asks
    the installed resolver (frontmatter defaults), otherwise returns default.
    Attribute reads go through `get`; item access (`data[key]`) does not.
    """

    def __init__(self, *args, resolver: Optional[Resolver] = None, **kwargs):
        super().__init__(*args, **kwargs)
        object.__setattr__(self, '_resolver', resolver)

    def install_resolver(self, resolver: Optional[Resolver]) -> None:
        object.__setattr__(self, '_resolver', resolver)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self:
            return self[key]
        if self._resolver is not None:
            value = self._resolver(key)
            if value is not None:
                return value
        return default


@dataclass(frozen=True)
class InlineExpression:
    """A `!py` tagged front matter value awaiting evaluation."""
    source: str


class TaxonomyType(BaseModel):
    """A classification axis such as categories or tags."""
    label:    str
    key:      str                    # front matter key the terms are read from
    metadata: dict[str, Any] = Field(default_factory=dict)


class Layout(BaseModel):
    """A layout template read from the layouts directory."""
    name:    str
    path:    str
    content: str = ""
    data:    dict[str, Any] = Field(default_factory=dict)

    @property
    def parent(self) -> Optional[str]:
        """Name of the layout this one is itself wrapped in, if any."""
        parent = self.data.get('layout')
        return parent if parent and parent != 'none' else None
