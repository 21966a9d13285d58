"""Integrity helpers: SHA-256 compute & verify for downloaded runtime jars."""

from __future__ import annotations

import hashlib
from pathlib import Path

from jvm_function_buildpack.errors import IntegrityError


def sha256_bytes(data: bytes) -> str:
    """Return the lowercase hex SHA-256 of *data*."""
    return hashlib.sha256(data).hexdigest()


def sha256(path: Path) -> str:
    """Return the hex SHA-256 of *path*."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _normalize_expected(expected: str) -> str:
    exp = expected.strip()
    if exp.startswith("sha256:"):
        exp = exp.split(":", 1)[1]
    return exp.lower()


def verify_sha256(path: Path, expected: str) -> None:
    """Raise IntegrityError if *path*'s sha256 does not match *expected*.

    *expected* may be either plain hex or `sha256:<hex>`.
    """
    got = sha256(path)
    exp = _normalize_expected(expected)
    if got != exp:
        raise IntegrityError(f"SHA-256 mismatch for {path.name}: got {got}, expected {exp}")
