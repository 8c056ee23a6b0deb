"""Dict with attribute-style read and write access"""

from typing import Any


class DotDict(dict):
    """A dict whose keys can also be read and written as attributes.

    Missing attributes read as None rather than raising.
    """

    def __getattr__(self, name: str) -> Any:
        if name.startswith('__'):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None
