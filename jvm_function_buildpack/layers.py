"""Layer directories and their content metadata.

A layer is `<layers_dir>/<name>/` plus `<layers_dir>/<name>.toml` (buildpack API 0.6):

    [types]
    launch = true
    build = false
    cache = true

    [metadata]
    url = "https://..."
    fingerprint = "..."
"""

from __future__ import annotations

import os
import shutil
import tempfile
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from jvm_function_buildpack.errors import LayerError
from jvm_function_buildpack.logging import get_logger


@dataclass(frozen=True)
class LayerFacets:
    launch: bool = False  # visible to the run phase
    build: bool = False  # visible to later build phases
    cache: bool = False  # restored on the next build


@dataclass(frozen=True)
class LayerContentMetadata:
    facets: LayerFacets = LayerFacets()
    metadata: Mapping[str, Any] = field(default_factory=dict)


class Layer:
    def __init__(self, name: str, layers_dir: Path) -> None:
        self.name = name
        self.path = layers_dir / name
        self.toml_path = layers_dir / f"{name}.toml"

    def read_content_metadata(self) -> LayerContentMetadata:
        """Return the recorded content metadata; unreadable or absent files read as empty."""
        try:
            with open(self.toml_path, "rb") as f:
                doc = tomllib.load(f)
        except FileNotFoundError:
            return LayerContentMetadata()
        except (OSError, tomllib.TOMLDecodeError) as exc:
            get_logger().debug("ignoring unreadable %s: %s", self.toml_path, exc)
            return LayerContentMetadata()

        layer_types = doc.get("types")
        if not isinstance(layer_types, Mapping):
            layer_types = {}
        metadata = doc.get("metadata")
        if not isinstance(metadata, Mapping):
            metadata = {}
        facets = LayerFacets(
            launch=layer_types.get("launch") is True,
            build=layer_types.get("build") is True,
            cache=layer_types.get("cache") is True,
        )
        return LayerContentMetadata(facets=facets, metadata=dict(metadata))

    def write_content_metadata(self, content: LayerContentMetadata) -> None:
        """Replace `<name>.toml` in one rename so readers never see a partial file."""
        doc = {
            "types": {
                "launch": content.facets.launch,
                "build": content.facets.build,
                "cache": content.facets.cache,
            },
            "metadata": dict(content.metadata),
        }
        try:
            fd, tmp = tempfile.mkstemp(
                prefix=f".{self.name}-", suffix=".toml", dir=self.toml_path.parent
            )
        except OSError as exc:
            raise LayerError(self.name, exc) from exc
        try:
            with os.fdopen(fd, "wb") as f:
                tomli_w.dump(doc, f)
            os.replace(tmp, self.toml_path)
        except OSError as exc:
            Path(tmp).unlink(missing_ok=True)
            raise LayerError(self.name, exc) from exc
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def reset(self) -> None:
        """Remove everything a previous build left in the layer directory."""
        try:
            if self.path.exists():
                shutil.rmtree(self.path)
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LayerError(self.name, exc) from exc


class LayerStore:
    """Layers directory handed to the build phase by the platform."""

    def __init__(self, layers_dir: Path) -> None:
        self.layers_dir = layers_dir

    def layer(self, name: str) -> Layer:
        layer = Layer(name, self.layers_dir)
        try:
            layer.path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LayerError(name, exc) from exc
        return layer
