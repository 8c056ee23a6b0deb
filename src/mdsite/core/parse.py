"""File discovery and front matter extraction"""

import json
import re
from pathlib import Path
from typing import Any

import yaml

from mdsite.core.models import InlineExpression


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?\n)?---\s*(?:\n|$)', re.DOTALL)
CONTENT_EXTENSIONS = {'.md', '.markdown', '.html', '.htm'}
DATA_EXTENSIONS = {'.yml', '.yaml', '.json'}


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that understands the `!py` inline expression tag."""


def _construct_inline(loader: yaml.SafeLoader, node: yaml.Node) -> InlineExpression:
    return InlineExpression(loader.construct_scalar(node))


FrontmatterLoader.add_constructor('!py', _construct_inline)


def load_yaml(text: str) -> Any:
    return yaml.load(text, Loader=FrontmatterLoader)


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = load_yaml(m.group(1) or '') or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def read_data_file(path: Path) -> dict[str, Any]:
    """Load a YAML/JSON data file. Top-level lists are exposed under 'rows'."""
    text = path.read_text(encoding='utf-8')
    try:
        data = json.loads(text) if path.suffix == '.json' else load_yaml(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid data file {path}: {e}") from e
    if data is None:
        return {}
    if isinstance(data, list):
        return {'rows': data}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid data file {path}: expected a mapping or list, got {type(data).__name__}")
    return data


def discover_files(path: Path, extensions: set[str] = CONTENT_EXTENSIONS) -> list[Path]:
    """Return sorted files with a matching suffix under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in extensions else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in extensions)
