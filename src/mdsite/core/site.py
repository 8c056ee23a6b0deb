"""Site registry: collections, layouts, taxonomy types, defaults and publishing policy"""

import logging
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any, Optional

from mdsite.config import CollectionConfig, Settings
from mdsite.core.hooks import HookRegistry
from mdsite.core.models import Layout, TaxonomyType
from mdsite.core.parse import CONTENT_EXTENSIONS, DATA_EXTENSIONS, discover_files, strip_frontmatter
from mdsite.core.resource.base import Resource
from mdsite.core.resource.model import Model
from mdsite.core.resource.origin import FileOrigin, Origin
from mdsite.core.utils.dates import to_datetime
from mdsite.core.utils.dotdict import DotDict


logger = logging.getLogger(__name__)


class FrontmatterDefaults:
    """Resolves front matter values configured for a path and/or collection scope.

    The most specific matching scope wins: a longer path beats a shorter one,
    and a scope naming the collection beats one that does not. Among equally
    specific scopes the last configured one wins.
    """

    def __init__(self, settings: Settings):
        self.sets = settings.defaults

    @staticmethod
    def _path_matches(scope_path: str, path: str) -> bool:
        scope = PurePosixPath(scope_path.strip("/")) if scope_path.strip("/") else None
        if scope is None:
            return True
        target = PurePosixPath(path)
        return target == scope or scope in target.parents

    def find(self, path: str, collection_label: str, key: str) -> Any:
        best = None
        best_rank = None
        for index, default_set in enumerate(self.sets):
            scope = default_set.scope
            if key not in default_set.values:
                continue
            if scope.collection is not None and scope.collection != collection_label:
                continue
            if not self._path_matches(scope.path, path):
                continue
            rank = (len(PurePosixPath(scope.path.strip("/")).parts), scope.collection is not None, index)
            if best_rank is None or rank > best_rank:
                best, best_rank = default_set.values[key], rank
        return best


class Publisher:
    """Decides whether a resource is written: drafts and future dates are held back."""

    def __init__(self, site: "Site"):
        self.site = site

    def publish(self, resource: Resource) -> bool:
        config = self.site.config
        if resource.data.get("published") is False and not config.unpublished:
            return False
        date = to_datetime(resource.data.get("date"))
        if date is not None and not config.future and date > to_datetime(self.site.time):
            return False
        return True


class Collection:
    """A named, ordered grouping of resources sharing write/data-only policy."""

    def __init__(self, site: "Site", label: str, config: CollectionConfig):
        self.site = site
        self.label = label
        self.config = config
        self.resources: list[Resource] = []

    @property
    def write(self) -> bool:
        return self.config.output

    @property
    def data(self) -> bool:
        return self.label == "data"

    @property
    def directory(self) -> Path:
        return self.site.source_dir / (self.config.directory or f"_{self.label}")

    def _is_root(self) -> bool:
        return self.directory.resolve() == self.site.source_dir.resolve()

    def discover(self) -> list[Path]:
        """Source files belonging to this collection.

        A collection rooted at the source directory skips anything under an
        underscored directory and underscored files.
        """
        if not self.directory.exists():
            return []
        extensions = DATA_EXTENSIONS if self.data else CONTENT_EXTENSIONS
        files = discover_files(self.directory, extensions)
        if self._is_root():
            files = [
                f for f in files
                if not any(part.startswith("_") for part in f.relative_to(self.site.source_dir).parts)
            ]
        return files

    def add(self, origin: Origin) -> Resource:
        """Wrap origin in a resource, read it and append it."""
        resource = Resource(Model(origin, self.site)).read()
        self.resources.append(resource)
        return resource

    def read(self) -> list[Resource]:
        for path in self.discover():
            self.add(FileOrigin(self.site.source_dir, path, self.label))
        self.sort_resources()
        logger.info("Read %d resource(s) into %s", len(self.resources), self.label)
        return self.resources

    def sort_resources(self) -> None:
        self.resources.sort()

    def __repr__(self) -> str:
        return f"<Collection {self.label} ({len(self.resources)})>"


class Site:
    """Holds the configuration and registries a resource consults."""

    def __init__(self, config: Settings, root: Path = Path("."), time: Optional[datetime] = None):
        self.config = config
        self.root = Path(root)
        self.source_dir = self.root / config.source_dir
        self.dest_dir = self.root / config.output_dir
        self.time = time or datetime.now(timezone.utc)
        self.hooks = HookRegistry()
        self.frontmatter_defaults = FrontmatterDefaults(config)
        self.publisher = Publisher(self)
        self.taxonomy_types: dict[str, TaxonomyType] = {
            label: TaxonomyType(label=label, key=t.key, metadata={"title": t.title or label.title()})
            for label, t in config.taxonomies.items()
        }
        self.collections: dict[str, Collection] = {
            label: Collection(self, label, cfg) for label, cfg in config.collections.items()
        }
        self.layouts: dict[str, Layout] = {}

    @property
    def resources(self) -> list[Resource]:
        return [r for c in self.collections.values() for r in c.resources]

    def in_dest_dir(self, path: str) -> Path:
        """Join path onto the output directory, dropping empty, "." and ".." segments."""
        parts = [p for p in path.replace("\\", "/").split("/") if p not in ("", ".", "..")]
        return self.dest_dir.joinpath(*parts)

    def read_layouts(self) -> dict[str, Layout]:
        layouts_dir = self.source_dir / self.config.layouts_dir
        if layouts_dir.exists():
            for path in discover_files(layouts_dir):
                data, content = strip_frontmatter(path.read_text(encoding="utf-8"))
                self.layouts[path.stem] = Layout(name=path.stem, path=str(path), content=content, data=data)
        return self.layouts

    def read(self) -> None:
        """Read layouts, then every collection. Data is read first so pages can use it."""
        self.read_layouts()
        for collection in sorted(self.collections.values(), key=lambda c: not c.data):
            collection.read()

    def site_data(self) -> DotDict:
        """Data collection contents keyed by file stem."""
        data = self.collections.get("data")
        if data is None:
            return DotDict()
        return DotDict((r.basename_without_ext(), r.data) for r in data.resources)

    def to_liquid(self) -> DotDict:
        return DotDict(
            url=self.config.url,
            base_path=self.config.base_path,
            time=self.time,
            data=self.site_data(),
        )
