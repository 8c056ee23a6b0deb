"""Origins: the raw backing source a resource wraps"""

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Any, Optional

from mdsite.core.parse import DATA_EXTENSIONS, read_data_file, strip_frontmatter


class Origin(ABC):
    """Supplies raw data, raw body, a stable id and path information for one content unit."""

    collection_label: str

    @property
    @abstractmethod
    def id(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def relative_path(self) -> PurePosixPath:
        raise NotImplementedError

    @abstractmethod
    def read(self) -> tuple[dict[str, Any], Optional[str]]:
        """Return (raw data, raw body). Body is None for pure data."""
        raise NotImplementedError


class FileOrigin(Origin):
    """A file under the site source directory."""

    def __init__(self, source_dir: Path, path: Path, collection_label: str):
        self.source_dir = Path(source_dir)
        self.path = Path(path)
        self.collection_label = collection_label

    @property
    def relative_path(self) -> PurePosixPath:
        return PurePosixPath(self.path.relative_to(self.source_dir).as_posix())

    @property
    def id(self) -> str:
        return f"repo://{self.collection_label}.collection/{self.relative_path}"

    def read(self) -> tuple[dict[str, Any], Optional[str]]:
        if self.path.suffix in DATA_EXTENSIONS:
            return read_data_file(self.path), None
        return strip_frontmatter(self.path.read_text(encoding='utf-8'))

    def __repr__(self) -> str:
        return f"FileOrigin({self.relative_path})"


class GeneratedOrigin(Origin):
    """An in-memory origin for generated resources.

    relative_path is the virtual location inside the collection; original_path,
    when given, names what the resource was generated from.
    """

    def __init__(
        self,
        relative_path: str,
        collection_label: str,
        data: dict[str, Any] = None,
        content: Optional[str] = None,
        original_path: Optional[str] = None,
        ):
        self._relative_path = PurePosixPath(relative_path)
        self.collection_label = collection_label
        self.data = dict(data or {})
        self.content = content
        self.original_path = PurePosixPath(original_path) if original_path else self._relative_path

    @property
    def relative_path(self) -> PurePosixPath:
        return self._relative_path

    @property
    def id(self) -> str:
        return f"generated://{self.collection_label}.collection/{self._relative_path}"

    def read(self) -> tuple[dict[str, Any], Optional[str]]:
        return dict(self.data), self.content

    def __repr__(self) -> str:
        return f"GeneratedOrigin({self._relative_path})"
