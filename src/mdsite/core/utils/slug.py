"""Slug generation and slug-to-title conversion"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def titleize_slug(slug: str) -> str:
    """Turn 'my-first-post' into 'My First Post'."""
    return " ".join(word.capitalize() for word in slug.split("-"))
