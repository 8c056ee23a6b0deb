"""Content transformation: inline expressions, markup conversion and layout wrapping"""

import builtins
import logging
import re
from typing import TYPE_CHECKING, Any, Callable, Optional

from markdown_it import MarkdownIt

from mdsite.core.models import InlineExpression, Layout

if TYPE_CHECKING:
    from mdsite.core.resource.base import Resource


logger = logging.getLogger(__name__)


MARKDOWN_EXTENSIONS = {'.md', '.markdown'}
HTML_EXTENSIONS = {'.html', '.htm'}
TEMPLATE_VAR_RE = re.compile(r'\{\{\s*([\w.]+)\s*\}\}')
MAX_LAYOUT_DEPTH = 20

# Builtins visible to !py front matter expressions
INLINE_BUILTINS = {
    name: getattr(builtins, name)
    for name in (
        "abs", "all", "any", "bool", "dict", "enumerate", "float", "int", "len", "list",
        "max", "min", "range", "round", "sorted", "str", "sum", "tuple", "zip",
    )
}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def lookup(context: Any, dotted: str) -> Any:
    """Resolve 'a.b.c' against nested mappings/objects; None on any miss."""
    value = context
    for part in dotted.split('.'):
        if value is None:
            return None
        getter = getattr(value, 'get', None)
        if callable(getter):
            value = getter(part)
        else:
            value = getattr(value, part, None)
    return value


def render_template(template: str, context: dict[str, Any]) -> str:
    """Replace {{ dotted.name }} placeholders; unresolved names render empty."""
    def _sub(m: re.Match) -> str:
        value = lookup(context, m.group(1))
        return "" if value is None else str(value)
    return TEMPLATE_VAR_RE.sub(_sub, template)


def _expand(value: Any, evaluate: Callable[[InlineExpression], Any]) -> Any:
    if isinstance(value, InlineExpression):
        return evaluate(value)
    if isinstance(value, dict):
        return {k: _expand(v, evaluate) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand(v, evaluate) for v in value]
    return value


class Transformer:
    """Runs the conversion stages for one resource. Must run after read()."""

    def __init__(self, resource: "Resource"):
        self.resource = resource
        self._parser: Optional[MarkdownIt] = None

    @property
    def site(self):
        return self.resource.site

    @property
    def output_ext(self) -> str:
        ext = self.resource.extname()
        if ext in MARKDOWN_EXTENSIONS or ext in HTML_EXTENSIONS:
            return '.html'
        return ext

    def execute_inline_code(self) -> None:
        """Replace !py values in the resource data.

        With inline_code enabled each expression is evaluated with resource,
        data and site in scope; otherwise it is replaced by its source text.
        """
        resource = self.resource
        enabled = self.site.config.inline_code

        def _evaluate(expr: InlineExpression) -> Any:
            if not enabled:
                return expr.source
            scope = {"resource": resource, "data": resource.data, "site": self.site}
            return eval(expr.source, {"__builtins__": INLINE_BUILTINS}, scope)  # noqa: S307

        for key, value in list(resource.data.items()):
            resource.data[key] = _expand(value, _evaluate)

    def convert(self, content: str) -> str:
        """Convert the body according to the source extension."""
        ext = self.resource.extname()
        if ext in MARKDOWN_EXTENSIONS:
            if self._parser is None:
                self._parser = _make_parser(self.site.config.parser_config)
            return self._parser.render(content)
        return content

    def layout_chain(self) -> list[Layout]:
        """The resource's layout followed by each parent layout."""
        chain: list[Layout] = []
        layout = self.resource.layout
        while layout is not None and len(chain) < MAX_LAYOUT_DEPTH:
            chain.append(layout)
            if layout.parent is None:
                break
            parent = self.site.layouts.get(layout.parent)
            if parent is None:
                logger.warning("Layout '%s' requested by layout '%s' does not exist.", layout.parent, layout.name)
            layout = parent
        return chain

    def place_in_layouts(self, content: str) -> str:
        output = content
        for layout in self.layout_chain():
            context = {
                "content": output,
                "resource": self.resource.to_liquid(),
                "site": self.site.to_liquid(),
                "layout": dict(layout.data, name=layout.name),
            }
            output = render_template(layout.content, context)
        return output

    def process(self) -> None:
        """Convert content, then wrap it in layouts to produce output."""
        resource = self.resource
        source = resource.content if resource.content is not None else resource.untransformed_content
        converted = self.convert(source or "")
        resource.content = converted
        resource.output = self.place_in_layouts(converted)
