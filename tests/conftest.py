from __future__ import annotations

import io
import itertools
import stat
from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest
from rich.console import Console

from jvm_function_buildpack.logging import BuildLogger

FUNCTION_BUNDLE_TOML = """\
[function]
class = "com.example.HelloFunction"
payload_class = "java.lang.String"
payload_media_type = "application/json"
return_class = "java.lang.String"
return_media_type = "application/json"
"""

_script_ids = itertools.count()


class FakeRuntimeServer:
    """httpx transport standing in for the runtime download host."""

    def __init__(self, body: bytes = b"PK\x03\x04 fake runtime jar", status: int = 200) -> None:
        self.body = body
        self.status = status
        self.requests: list[httpx.Request] = []
        self.client = httpx.Client(transport=httpx.MockTransport(self._handle))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, content=self.body)


@pytest.fixture
def runtime_server() -> Iterator[FakeRuntimeServer]:
    server = FakeRuntimeServer()
    yield server
    server.client.close()


@pytest.fixture
def log() -> BuildLogger:
    """BuildLogger writing into in-memory buffers (`log.console.file.getvalue()`)."""
    return BuildLogger(
        debug=True,
        console=Console(file=io.StringIO(), width=200),
        err_console=Console(file=io.StringIO(), width=200),
    )


@pytest.fixture
def fake_java(tmp_path: Path) -> Callable[..., Path]:
    """Factory for a `java` stand-in that behaves like the detector.

    The script records its arguments next to itself (`<script>.args`), optionally
    writes a manifest into the output dir (5th argument) and exits with *exit_code*,
    or kills itself with SIGKILL when *killed* is set.
    """

    def make(
        exit_code: int = 0, manifest: str | None = FUNCTION_BUNDLE_TOML, killed: bool = False
    ) -> Path:
        script = tmp_path / "bin" / f"java-{next(_script_ids)}"
        script.parent.mkdir(parents=True, exist_ok=True)
        lines = ["#!/bin/sh", f'printf "%s\\n" "$@" > "{script}.args"']
        if manifest is not None:
            lines += ['cat > "$5/function-bundle.toml" <<\'EOF\'', manifest.rstrip("\n"), "EOF"]
        if killed:
            lines.append("kill -9 $$")
        lines.append(f"exit {exit_code}")
        script.write_text("\n".join(lines) + "\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return make


@pytest.fixture
def buildpack_dir(tmp_path: Path) -> Callable[..., Path]:
    def make(url: str = "https://x/runtime.jar", sha256: str = "abc", extra: str = "") -> Path:
        d = tmp_path / "buildpack"
        d.mkdir(exist_ok=True)
        (d / "buildpack.toml").write_text(
            'api = "0.6"\n\n'
            "[buildpack]\n"
            'id = "example/jvm-function"\n'
            'version = "0.1.0"\n\n'
            "[metadata.runtime]\n"
            f'url = "{url}"\n'
            f'sha256 = "{sha256}"\n' + extra,
            encoding="utf-8",
        )
        return d

    return make
