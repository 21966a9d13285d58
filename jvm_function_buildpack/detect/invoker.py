"""Function bundle layer: run the external detector and read back its manifest."""

from __future__ import annotations

import subprocess
from pathlib import Path

from jvm_function_buildpack.detect.base import classify_exit_code
from jvm_function_buildpack.detect.bundle import read_function_bundle
from jvm_function_buildpack.errors import DetectorLaunchError
from jvm_function_buildpack.layers import Layer, LayerContentMetadata, LayerFacets, LayerStore
from jvm_function_buildpack.logging import BuildLogger, get_logger
from jvm_function_buildpack.types import FunctionBundleToml

FUNCTION_BUNDLE_LAYER_NAME = "function-bundle"
FUNCTION_BUNDLE_LAYER_FACETS = LayerFacets(launch=True, build=False, cache=False)


def run_detector(
    runtime_jar: Path, app_dir: Path, output_dir: Path, *, java: str = "java"
) -> int | None:
    """Run the detector to completion and return its exit code (None if signalled)."""
    cmd = [java, "-jar", str(runtime_jar), "bundle", str(app_dir), str(output_dir)]
    get_logger().debug("running detector: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, check=False)
    except OSError as exc:
        raise DetectorLaunchError(cmd[0], str(exc)) from exc
    # Negative return codes are signal numbers, not exit codes.
    return proc.returncode if proc.returncode >= 0 else None


def contribute_function_bundle_layer(
    store: LayerStore,
    runtime_jar: Path,
    app_dir: Path,
    log: BuildLogger,
    *,
    java: str = "java",
) -> tuple[Layer, FunctionBundleToml]:
    """Detect the single function in *app_dir* into a fresh, uncached layer.

    Raises a DetectError subclass for every non-zero detector status and
    ManifestParseError when a successful run left no readable manifest.
    """
    log.header("Detecting function")

    layer = store.layer(FUNCTION_BUNDLE_LAYER_NAME)
    # Only a manifest written by this run may count as a detection result.
    layer.reset()
    layer.write_content_metadata(LayerContentMetadata(facets=FUNCTION_BUNDLE_LAYER_FACETS))

    code = run_detector(runtime_jar, app_dir, layer.path, java=java)
    log.debug(f"Detector exited with code {code}")
    error = classify_exit_code(code).to_error()
    if error is not None:
        raise error
    log.info("Detection successful")

    bundle = read_function_bundle(layer.path)
    log.header(f"Detected function: {bundle.function.class_}")
    log.info(f"Payload type: {bundle.function.payload_class}")
    log.info(f"Return type: {bundle.function.return_class}")
    return layer, bundle
