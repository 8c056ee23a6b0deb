"""Destination: permalink rendering, URLs and the output file for one resource"""

import logging
import re
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote

from mdsite.core.utils.dates import to_datetime
from mdsite.core.utils.slug import slugify

if TYPE_CHECKING:
    from mdsite.core.resource.base import Resource


logger = logging.getLogger(__name__)


PERMALINK_STYLES: dict[str, str] = {
    "pretty": "/:categories/:year/:month/:day/:slug/",
    "date":   "/:categories/:year/:month/:day/:slug.html",
    "simple": "/:slug/",
    "none":   "/:path:output_ext",
}

PLACEHOLDER_RE = re.compile(r':([a-z_]+)')


class PermalinkProcessor:
    """Expands a permalink template (or named style) against a resource."""

    def __init__(self, resource: "Resource"):
        self.resource = resource

    def template(self) -> str:
        resource = self.resource
        template = (
            resource.permalink
            or resource.collection.config.permalink
            or resource.site.config.permalink
        )
        return PERMALINK_STYLES.get(template, template)

    def _path(self) -> str:
        """Source path without date prefixes, underscored segments or extension."""
        path = PurePosixPath(self.resource.relative_path_basename_without_prefix())
        if path.name == "index":
            path = path.parent
        return "" if str(path) == "." else str(path)

    def _date_part(self, fmt: str) -> str:
        date = to_datetime(self.resource.date)
        return date.strftime(fmt) if date else ""

    def placeholders(self) -> dict[str, str]:
        resource = self.resource
        data = resource.data
        slug = data.get("slug") or resource.basename_without_ext()
        return {
            "path": self._path(),
            "slug": slugify(str(slug)),
            "name": slugify(resource.basename_without_ext()),
            "title": slugify(str(data.get("title") or slug)),
            "collection": resource.collection.label,
            "categories": "/".join(slugify(c) for c in data.get("categories") or []),
            "year": self._date_part("%Y"),
            "month": self._date_part("%m"),
            "day": self._date_part("%d"),
            "output_ext": resource.transformer.output_ext,
        }

    def transform(self) -> str:
        values = self.placeholders()
        url = PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), self.template())
        url = re.sub(r'/{2,}', '/', f"/{url}")
        return url


class Destination:
    """Owns the computed URLs and output path of a resource that is written."""

    def __init__(self, resource: "Resource"):
        self.resource = resource
        self.output_ext = resource.transformer.output_ext
        self._processor = PermalinkProcessor(resource)
        self._relative_url = None

    @property
    def site(self):
        return self.resource.site

    def relative_url(self) -> str:
        if self._relative_url is None:
            base = self.site.config.base_path.rstrip("/")
            self._relative_url = f"{base}{self._processor.transform()}"
        return self._relative_url

    def absolute_url(self) -> str:
        return f"{self.site.config.url.rstrip('/')}{self.relative_url()}"

    def output_path(self) -> Path:
        url = unquote(self.relative_url())
        base = self.site.config.base_path.rstrip("/")
        if base and url.startswith(base):
            url = url[len(base):]
        path = url.lstrip("/")
        if url.endswith("/"):
            path = f"{path}index{self.output_ext or '.html'}"
        if self.output_ext and not path.endswith(self.output_ext):
            path = f"{path}{self.output_ext}"
        return self.site.in_dest_dir(path)

    def write(self, output: str) -> Path:
        path = self.output_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Writing: %s", path)
        path.write_text(output or "", encoding="utf-8")
        return path
