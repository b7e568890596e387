import hashlib


def compute_fingerprint(content: bytes) -> str:
    """Return the lowercase SHA-256 hex digest of ``content`` (64 chars)."""
    return hashlib.sha256(content).hexdigest()
