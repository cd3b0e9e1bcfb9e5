"""SHA-256 hashing of stored markup for change detection"""

import hashlib


def content_hash(markup: str) -> str:
    """Return the hex SHA-256 of markup (64 chars, matches the String(64) hash column)."""
    return hashlib.sha256(markup.encode("utf-8")).hexdigest()
