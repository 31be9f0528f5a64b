"""Unit tests for content fingerprinting."""

import hashlib

from media_pipeline.core.job_processing.fingerprint import fingerprint


def test_fingerprint_is_deterministic():
    """Same bytes always give the same digest."""
    content = b"The quick brown fox"
    assert fingerprint(content) == fingerprint(content)


def test_fingerprint_matches_sha256():
    content = b"hello world"
    assert fingerprint(content) == hashlib.sha256(content).hexdigest()


def test_fingerprint_differs_for_different_content():
    assert fingerprint(b"document one") != fingerprint(b"document two")


def test_fingerprint_is_64_hex_chars():
    digest = fingerprint(b"")
    assert len(digest) == 64
    int(digest, 16)


def test_fingerprint_accepts_str_as_utf8():
    text = "café"
    assert fingerprint(text) == fingerprint(text.encode("utf-8"))
