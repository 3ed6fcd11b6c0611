"""SHA-256 content hashing for article change detection"""

import hashlib
import json
from typing import Any


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content (64 chars, matches String(64) column)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def content_hash(content: Any) -> str:
    """Hash structured content by its canonical JSON form so key order never matters."""
    return sha256(json.dumps(content, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
