"""Build fingerprints for change detection in the index"""

import hashlib


def fingerprint(*parts: str) -> str:
    """Hex SHA-256 over the given parts, NUL-separated (64 chars, fits the String(64) column)."""
    digest = hashlib.sha256()
    for i, part in enumerate(parts):
        if i:
            digest.update(b"\0")
        digest.update((part or "").encode("utf-8"))
    return digest.hexdigest()
