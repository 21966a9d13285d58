"""Build phase orchestration: config → runtime layer → function detection → launch.toml."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import httpx

from jvm_function_buildpack.buildpacks.runtime import contribute_runtime_layer
from jvm_function_buildpack.config import BuildpackConfig, debug_enabled
from jvm_function_buildpack.detect.invoker import contribute_function_bundle_layer
from jvm_function_buildpack.errors import BuildpackError
from jvm_function_buildpack.launch import assemble_launch, write_launch_toml
from jvm_function_buildpack.layers import LayerStore
from jvm_function_buildpack.logging import BuildLogger
from jvm_function_buildpack.types import FunctionBundleToml, LaunchModel


@dataclass
class BuildContext:
    app_dir: Path
    layers_dir: Path
    buildpack_dir: Path
    platform_dir: Path | None = None
    java: str = "java"
    verify_integrity: bool | None = None  # None: use buildpack.toml
    http_client: httpx.Client | None = None


@dataclass
class BuildResult:
    runtime_jar: Path
    function_dir: Path
    function_bundle: FunctionBundleToml
    launch: LaunchModel
    launch_toml: Path


def build_pipeline(ctx: BuildContext, log: BuildLogger | None = None) -> BuildResult:
    """Run the whole build phase once.

    Every BuildpackError is rendered through `log.error` and re-raised as BuildFailed;
    nothing is retried or recovered here.
    """
    if log is None:
        log = BuildLogger(debug=debug_enabled(ctx.platform_dir))

    try:
        # Both runtime keys are checked before any network activity.
        config = BuildpackConfig.load(ctx.buildpack_dir)
        descriptor = config.runtime_descriptor()
        verify = config.verify_integrity() if ctx.verify_integrity is None else ctx.verify_integrity

        store = LayerStore(ctx.layers_dir)
        runtime_jar = contribute_runtime_layer(
            store, descriptor, log, verify_integrity=verify, client=ctx.http_client
        )
        layer, bundle = contribute_function_bundle_layer(
            store, runtime_jar, ctx.app_dir, log, java=ctx.java
        )

        launch = assemble_launch(runtime_jar, layer.path)
        launch_toml = write_launch_toml(ctx.layers_dir, launch)
    except BuildpackError as exc:
        raise log.error(exc.title, exc.body) from exc

    return BuildResult(
        runtime_jar=runtime_jar,
        function_dir=layer.path,
        function_bundle=bundle,
        launch=launch,
        launch_toml=launch_toml,
    )
