"""
Content fingerprinting.

Deterministic SHA-256 digest of source content, used as the natural key
for deduplicating result records.

Dependencies: hashlib
System role: Idempotency key for the result store
"""

import hashlib


def fingerprint(content: bytes | str) -> str:
    """
    Compute the content fingerprint.

    Args:
        content: Raw object bytes (str is UTF-8 encoded first)

    Returns:
        str: 64-character lowercase hex digest
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()
