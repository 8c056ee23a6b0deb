"""Resource: one content unit and its read -> transform -> write lifecycle

A Resource wraps a Model (an origin bound to a site and collection). read()
pulls the front matter and body, normalizes categories/tags, imports
taxonomy terms, fills in slug/title/date and attaches a Destination when the
resource is written. transform() renders output; write() persists it.

Memoized fields (layout, transformer, relations, taxonomies, to_liquid) are
computed on first access and cached for the life of the instance. They are
not thread-safe.
"""

import json
import logging
import re
from collections.abc import Mapping
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Optional

from mdsite.core.hooks import HookEvent
from mdsite.core.models import ResourceData
from mdsite.core.resource.capabilities import LayoutPlaceable, Orderable, Publishable, Renderable
from mdsite.core.resource.destination import Destination
from mdsite.core.resource.relations import Relations
from mdsite.core.resource.taxonomy import (
    build_taxonomies,
    import_terms,
    pluralized_list,
    taxonomies_to_dict,
)
from mdsite.core.resource.transformer import Transformer
from mdsite.core.utils.dates import parse_date
from mdsite.core.utils.dotdict import DotDict
from mdsite.core.utils.slug import titleize_slug
from mdsite.errors import DataTypeError, MissingDestinationError

if TYPE_CHECKING:
    from mdsite.core.resource.model import Model


logger = logging.getLogger(__name__)


DATE_FILENAME_MATCHER = re.compile(r'^(?:[^/]*/)*?(\d{2,4}-\d{1,2}-\d{1,2})-([^/]*)(\.[^.]+)$')


def format_url(url: Optional[str]) -> str:
    """Strip a trailing index.html/index.htm, then a trailing .html/.htm."""
    url = re.sub(r'index\.html?$', '', url or '')
    return re.sub(r'\.html?$', '', url)


class Resource(Orderable, Publishable, LayoutPlaceable, Renderable):

    def __init__(self, model: "Model"):
        if model is None:
            raise ValueError("Resource requires a model")
        self.model = model
        self.site = model.site
        self.content: Optional[str] = None
        self.untransformed_content: Optional[str] = None
        self.output: Optional[str] = None
        self.destination: Optional[Destination] = None
        self._data = ResourceData()
        self._transformer: Optional[Transformer] = None
        self._relations: Optional[Relations] = None
        self._taxonomies: Optional[DotDict] = None
        self.data = self._data

        self.trigger_hooks(HookEvent.post_init)

    # --- bindings ---

    @property
    def collection(self):
        return self.model.collection

    @property
    def data(self) -> ResourceData:
        return self._data

    @data.setter
    def data(self, new_data: Mapping) -> None:
        if not isinstance(new_data, Mapping):
            raise DataTypeError(
                f"{type(self).__name__} data should be a mapping, got {type(new_data).__name__}"
            )
        data = new_data if isinstance(new_data, ResourceData) else ResourceData(new_data)
        data.install_resolver(self._resolve_default)
        self._data = data

    def _resolve_default(self, key: str) -> Any:
        return self.site.frontmatter_defaults.find(str(self.relative_path), self.collection.label, key)

    @property
    def transformer(self) -> Transformer:
        if self._transformer is None:
            self._transformer = Transformer(self)
        return self._transformer

    @property
    def relations(self) -> Relations:
        if self._relations is None:
            self._relations = Relations(self)
        return self._relations

    @property
    def taxonomies(self) -> DotDict:
        if self._taxonomies is None:
            self._taxonomies = build_taxonomies(self.site.taxonomy_types.values())
        return self._taxonomies

    # --- hooks ---

    def trigger_hooks(self, event: HookEvent, *args) -> None:
        """Emit event for this resource's collection label and for 'resources'."""
        if self.collection is not None:
            self.site.hooks.trigger(self.collection.label, event, self, *args)
        self.site.hooks.trigger("resources", event, self, *args)

    @contextmanager
    def around_hook(self, phase: str):
        self.trigger_hooks(HookEvent(f"pre_{phase}"))
        yield
        self.trigger_hooks(HookEvent(f"post_{phase}"))

    # --- lifecycle ---

    def read(self) -> "Resource":
        """Populate data and content from the model and derive metadata."""
        with self.around_hook("read"):
            self._taxonomies = None
            self.data = self.model.data_attributes
            self.content = self.model.content

            if not self.collection.data:
                self.untransformed_content = self.content
                self._normalize_categories_and_tags()
                self._import_taxonomies_from_data()
                self._ensure_default_data()
                self.transformer.execute_inline_code()
                self._set_date_from_string(self.data.get("date"))

            if self.requires_destination():
                self.destination = Destination(self)
        return self

    def transform(self) -> None:
        if self.collection.data:
            return
        with self.around_hook("transform"):
            self.transformer.process()

    def write(self) -> None:
        if self.destination is None:
            raise MissingDestinationError(f"{self.relative_path} has no destination to write to")
        with self.around_hook("write"):
            self.destination.write(self.output)

    def requires_destination(self) -> bool:
        config = self.data.get("config")
        output = config.get("output") if isinstance(config, Mapping) else None
        return self.collection.write and output is not False

    # --- paths and urls ---

    @property
    def relative_path(self) -> PurePosixPath:
        return self.model.origin.relative_path

    @property
    def path(self) -> str:
        origin = self.model.origin
        return str(getattr(origin, "original_path", None) or self.relative_path)

    @property
    def id(self) -> str:
        return self.model.origin.id

    def basename_without_ext(self) -> str:
        return self.relative_path.stem

    def extname(self) -> str:
        return self.relative_path.suffix

    def relative_path_basename_without_prefix(self) -> str:
        """Relative path without date prefixes, underscored segments or final extension."""
        parts = []
        for filename in self.relative_path.parts:
            if matches := DATE_FILENAME_MATCHER.match(filename):
                filename = matches[2] + matches[3]
            if not filename.startswith("_"):
                parts.append(filename)
        if not parts:
            return ""
        path = PurePosixPath(*parts)
        return str(path.with_name(path.stem))

    @property
    def permalink(self) -> Optional[str]:
        return self.data.get("permalink")

    @property
    def absolute_url(self) -> str:
        return format_url(self.destination.absolute_url() if self.destination else None)

    @property
    def relative_url(self) -> str:
        return format_url(self.destination.relative_url() if self.destination else None)

    # --- derived data ---

    @property
    def date(self) -> Any:
        if not self.data.get("date"):
            self.data["date"] = self.site.time
        return self.data["date"]

    @property
    def summary(self) -> str:
        """First non-empty line of the content."""
        for line in (self.content or "").strip().splitlines():
            return line.strip()
        return ""

    def _ensure_default_data(self) -> None:
        if matches := DATE_FILENAME_MATCHER.match(str(self.relative_path)):
            if not self.data.get("date"):
                self._set_date_from_string(matches[1])
            slug = matches[2]
        else:
            slug = self.basename_without_ext()

        if not self.data.get("slug"):
            self.data["slug"] = slug
        if not self.data.get("title"):
            self.data["title"] = titleize_slug(slug)

    def _set_date_from_string(self, value: Any) -> None:
        if not isinstance(value, str):
            return
        self.data["date"] = parse_date(
            value,
            f"Resource '{self.relative_path}' does not have a valid date in the {self.model}.",
        )

    def _normalize_categories_and_tags(self) -> None:
        self.data["categories"] = pluralized_list(self.data, "category", "categories")
        self.data["tags"] = pluralized_list(self.data, "tag", "tags")

    def _import_taxonomies_from_data(self) -> None:
        import_terms(self, self.taxonomies)

    # --- serialization ---

    def to_h(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "absolute_url": self.absolute_url,
            "relative_path": str(self.relative_path),
            "relative_url": self.relative_url,
            "date": self.date,
            "data": dict(self.data),
            "taxonomies": taxonomies_to_dict(self.taxonomies),
            "untransformed_content": self.untransformed_content,
            "content": self.content,
            "output": self.output,
        }

    def as_json(self) -> dict[str, Any]:
        return self.to_h()

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.as_json(), default=_json_default, **kwargs)

    def __str__(self) -> str:
        return self.output or self.content or ""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
