"""Content fingerprints for ETags."""

import hashlib


def hash_data(data: bytes) -> str:
    """Return the SHA-256 hex digest of *data*."""
    return hashlib.sha256(data).hexdigest()
