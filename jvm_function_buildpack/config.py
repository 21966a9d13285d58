"""buildpack.toml lookup and platform flags."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jvm_function_buildpack.errors import ConfigError
from jvm_function_buildpack.types import RuntimeDescriptor

BUILDPACK_TOML = "buildpack.toml"
DEBUG_ENV_VAR = "HEROKU_BUILDPACK_DEBUG"

_MISSING = object()


def debug_enabled(
    platform_dir: Path | None = None, environ: Mapping[str, str] | None = None
) -> bool:
    """True when the debug flag is set in the process env or the platform env dir.

    The platform forwards user-provided env vars as files under `<platform>/env/`.
    Only presence matters; the value is ignored.
    """
    env = os.environ if environ is None else environ
    if DEBUG_ENV_VAR in env:
        return True
    return platform_dir is not None and (platform_dir / "env" / DEBUG_ENV_VAR).is_file()


class BuildpackConfig:
    """Parsed buildpack.toml with dotted-path lookup (e.g. `metadata.runtime.url`)."""

    def __init__(self, document: Mapping[str, Any], source: Path | None = None) -> None:
        self.document = document
        self.source = source

    @classmethod
    def load(cls, buildpack_dir: Path) -> BuildpackConfig:
        path = buildpack_dir / BUILDPACK_TOML
        try:
            with open(path, "rb") as f:
                document = tomllib.load(f)
        except FileNotFoundError as exc:
            raise ConfigError(f"{path} does not exist") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path} is not valid TOML: {exc}") from exc
        return cls(document, source=path)

    def get(self, key: str, default: Any = _MISSING) -> Any:
        node: Any = self.document
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                if default is not _MISSING:
                    return default
                raise ConfigError(f"buildpack.toml does not have `{key}` key")
            node = node[part]
        return node

    def _get_str(self, key: str) -> str:
        value = self.get(key)
        if not isinstance(value, str):
            raise ConfigError(f"buildpack.toml's `{key}` is not a string")
        return value

    def runtime_descriptor(self) -> RuntimeDescriptor:
        return RuntimeDescriptor(
            url=self._get_str("metadata.runtime.url"),
            sha256=self._get_str("metadata.runtime.sha256"),
        )

    def verify_integrity(self) -> bool:
        value = self.get("metadata.runtime.verify_integrity", False)
        if not isinstance(value, bool):
            raise ConfigError(
                "buildpack.toml's `metadata.runtime.verify_integrity` is not a boolean"
            )
        return value
