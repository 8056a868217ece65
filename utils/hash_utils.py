"""Shared hashing utilities."""

import hashlib

FINGERPRINT_LENGTH = 8


def compute_fingerprint(text: str, length: int = FINGERPRINT_LENGTH) -> str:
    """Return the first *length* hex characters of the SHA-256 of *text* (UTF-8)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:length]
