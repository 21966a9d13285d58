"""Reader for `function-bundle.toml`, the detector's output manifest."""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import ValidationError

from jvm_function_buildpack.errors import ManifestParseError
from jvm_function_buildpack.types import FunctionBundleToml

FUNCTION_BUNDLE_TOML = "function-bundle.toml"


def read_function_bundle(layer_dir: Path) -> FunctionBundleToml:
    path = layer_dir / FUNCTION_BUNDLE_TOML
    try:
        with open(path, "rb") as f:
            doc = tomllib.load(f)
    except FileNotFoundError as exc:
        raise ManifestParseError(
            f"\nThe function detector reported success but did not write {path}.\n"
        ) from exc
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ManifestParseError(f"\nCould not read {path}: {exc}\n") from exc

    try:
        return FunctionBundleToml.model_validate(doc)
    except ValidationError as exc:
        raise ManifestParseError(f"\n{path} is malformed:\n{exc}\n") from exc
