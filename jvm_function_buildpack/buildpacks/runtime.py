"""Function runtime layer.

Makes sure `<layers>/runtime/runtime.jar` holds the runtime declared in
buildpack.toml. The layer is cached across builds and reused when the recorded
fingerprint still matches and the jar is still on disk.

The jar and its recorded fingerprint change together:
- a stale jar is removed before new metadata is written;
- the download lands in `runtime.jar.part` and is renamed into place only after
  the (optional) integrity check passes.
"""

from __future__ import annotations

import os
from pathlib import Path

import httpx

from jvm_function_buildpack.cache import is_cache_valid
from jvm_function_buildpack.errors import (
    FetchError,
    IntegrityError,
    RuntimeDownloadError,
    RuntimeInstallError,
    RuntimeIntegrityError,
)
from jvm_function_buildpack.installer.download import download
from jvm_function_buildpack.layers import LayerContentMetadata, LayerFacets, LayerStore
from jvm_function_buildpack.logging import BuildLogger
from jvm_function_buildpack.signing.checks import verify_sha256
from jvm_function_buildpack.types import RuntimeDescriptor

RUNTIME_LAYER_NAME = "runtime"
RUNTIME_JAR_FILE_NAME = "runtime.jar"
RUNTIME_LAYER_FACETS = LayerFacets(launch=True, build=False, cache=True)


def contribute_runtime_layer(
    store: LayerStore,
    descriptor: RuntimeDescriptor,
    log: BuildLogger,
    *,
    verify_integrity: bool = False,
    client: httpx.Client | None = None,
) -> Path:
    """Install the function runtime (or reuse the cached one) and return the jar path.

    Raises RuntimeDownloadError when the download fails and RuntimeIntegrityError when
    *verify_integrity* is set and the digest differs from `descriptor.sha256`.
    """
    log.header("Installing Java function runtime")

    layer = store.layer(RUNTIME_LAYER_NAME)
    jar = layer.path / RUNTIME_JAR_FILE_NAME
    cached = layer.read_content_metadata().metadata.get("fingerprint", "")

    if is_cache_valid(descriptor, cached, jar.exists()):
        log.info("Installed Java function runtime from cache")
        return jar

    log.debug("Creating function runtime layer")
    try:
        jar.unlink(missing_ok=True)
    except OSError as exc:
        raise RuntimeInstallError(exc) from exc
    layer.write_content_metadata(
        LayerContentMetadata(
            facets=RUNTIME_LAYER_FACETS,
            metadata={"url": descriptor.url, "fingerprint": descriptor.sha256},
        )
    )
    log.debug("Function runtime layer successfully created")

    log.info("Starting download of function runtime")
    staging = jar.with_name(jar.name + ".part")
    try:
        download(descriptor.url, staging, client=client)
    except FetchError as exc:
        staging.unlink(missing_ok=True)
        log.debug(str(exc))
        raise RuntimeDownloadError(descriptor.url) from exc
    log.info("Function runtime download successful")

    if verify_integrity:
        try:
            verify_sha256(staging, expected=descriptor.sha256)
        except IntegrityError as exc:
            staging.unlink(missing_ok=True)
            log.debug(str(exc))
            raise RuntimeIntegrityError() from exc
    else:
        log.debug("Skipping function runtime integrity check")

    try:
        os.replace(staging, jar)
    except OSError as exc:
        staging.unlink(missing_ok=True)
        raise RuntimeInstallError(exc) from exc
    log.info("Function runtime installation successful")
    return jar
