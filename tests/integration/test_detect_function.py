from __future__ import annotations

from pathlib import Path

import pytest

from jvm_function_buildpack.detect import invoker
from jvm_function_buildpack.errors import (
    DetectorInternalError,
    DetectorLaunchError,
    DetectorUnexpectedExitError,
    ManifestParseError,
    MultipleFunctionsFoundError,
    NoFunctionFoundError,
)
from jvm_function_buildpack.layers import LayerFacets, LayerStore


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    root = tmp_path / "app"
    (root / "src" / "main" / "java").mkdir(parents=True)
    (root / "pom.xml").write_text("<project/>\n", encoding="utf-8")
    return root


@pytest.fixture
def store(tmp_path: Path) -> LayerStore:
    return LayerStore(tmp_path / "layers")


@pytest.mark.timeout(20)
def test_successful_detection_reads_manifest(store, app_dir, fake_java, log) -> None:
    java = fake_java(exit_code=0)
    runtime_jar = Path("/layers/runtime/runtime.jar")

    layer, bundle = invoker.contribute_function_bundle_layer(
        store, runtime_jar, app_dir, log, java=str(java)
    )

    assert layer.path == store.layers_dir / "function-bundle"
    assert bundle.function.class_ == "com.example.HelloFunction"
    assert bundle.function.payload_media_type == "application/json"
    args = Path(f"{java}.args").read_text(encoding="utf-8").splitlines()
    assert args == ["-jar", str(runtime_jar), "bundle", str(app_dir), str(layer.path)]
    content = layer.read_content_metadata()
    assert content.facets == LayerFacets(launch=True, build=False, cache=False)
    out = log.console.file.getvalue()
    assert "[Detected function: com.example.HelloFunction]" in out
    assert "[INFO] Payload type: java.lang.String" in out


@pytest.mark.timeout(20)
def test_multiple_functions_fail_without_reading_manifest(
    store, app_dir, fake_java, log, monkeypatch
) -> None:
    reads: list[Path] = []
    monkeypatch.setattr(invoker, "read_function_bundle", lambda d: reads.append(d))

    with pytest.raises(MultipleFunctionsFoundError) as exc_info:
        invoker.contribute_function_bundle_layer(
            store, Path("runtime.jar"), app_dir, log, java=str(fake_java(exit_code=2))
        )

    assert exc_info.value.title == "Multiple functions found"
    assert reads == []


@pytest.mark.timeout(20)
@pytest.mark.parametrize(
    ("exit_code", "error_type"),
    [
        (1, NoFunctionFoundError),
        (3, DetectorInternalError),
        (6, DetectorInternalError),
        (42, DetectorUnexpectedExitError),
    ],
)
def test_detector_failures(store, app_dir, fake_java, log, exit_code, error_type) -> None:
    java = fake_java(exit_code=exit_code, manifest=None)
    with pytest.raises(error_type) as exc_info:
        invoker.contribute_function_bundle_layer(
            store, Path("runtime.jar"), app_dir, log, java=str(java)
        )
    assert exc_info.value.exit_code == exit_code


@pytest.mark.timeout(20)
def test_signalled_detector_has_no_exit_code(store, app_dir, fake_java, log) -> None:
    java = fake_java(killed=True)
    with pytest.raises(DetectorUnexpectedExitError) as exc_info:
        invoker.contribute_function_bundle_layer(
            store, Path("runtime.jar"), app_dir, log, java=str(java)
        )
    assert exc_info.value.exit_code is None


@pytest.mark.timeout(20)
def test_success_without_manifest_is_parse_error(store, app_dir, fake_java, log) -> None:
    java = fake_java(exit_code=0, manifest=None)
    with pytest.raises(ManifestParseError):
        invoker.contribute_function_bundle_layer(
            store, Path("runtime.jar"), app_dir, log, java=str(java)
        )


@pytest.mark.timeout(20)
def test_success_with_incomplete_manifest_is_parse_error(store, app_dir, fake_java, log) -> None:
    java = fake_java(exit_code=0, manifest='[function]\nclass = "com.example.Fn"\n')
    with pytest.raises(ManifestParseError):
        invoker.contribute_function_bundle_layer(
            store, Path("runtime.jar"), app_dir, log, java=str(java)
        )


def test_missing_java_executable(store, app_dir, tmp_path, log) -> None:
    with pytest.raises(DetectorLaunchError):
        invoker.contribute_function_bundle_layer(
            store, Path("runtime.jar"), app_dir, log, java=str(tmp_path / "no-such-java")
        )


@pytest.mark.timeout(20)
def test_manifest_from_previous_build_is_not_reused(store, app_dir, fake_java, log) -> None:
    invoker.contribute_function_bundle_layer(
        store, Path("runtime.jar"), app_dir, log, java=str(fake_java(exit_code=0))
    )
    stale = store.layers_dir / "function-bundle" / "function-bundle.toml"
    assert stale.exists()

    with pytest.raises(ManifestParseError):
        invoker.contribute_function_bundle_layer(
            store,
            Path("runtime.jar"),
            app_dir,
            log,
            java=str(fake_java(exit_code=0, manifest=None)),
        )
    assert not stale.exists()
