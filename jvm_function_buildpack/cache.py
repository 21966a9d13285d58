"""Reuse decision for the cached runtime layer."""

from __future__ import annotations

from jvm_function_buildpack.types import RuntimeDescriptor


def is_cache_valid(descriptor: RuntimeDescriptor, cached: str, artifact_exists: bool) -> bool:
    """Return True iff the cached fingerprint matches *descriptor* and the artifact is present.

    A matching fingerprint alone is not enough (the file may have been removed), and
    neither is an existing file (buildpack.toml may now point at another version).
    """
    return descriptor.sha256 == cached and artifact_exists
