"""Launch descriptor emission (`<layers>/launch.toml`)."""

from __future__ import annotations

import shlex
from pathlib import Path

import tomli_w

from jvm_function_buildpack.errors import LayerError
from jvm_function_buildpack.types import LaunchModel, ProcessModel
from jvm_function_buildpack.validator import validate_launch

LAUNCH_TOML = "launch.toml"
# Left for the launch-time shell to expand.
PORT_PLACEHOLDER = "${PORT:-8080}"


def assemble_launch(runtime_jar: Path, function_dir: Path) -> LaunchModel:
    """Describe the default `web` process serving the detected function.

    The process is not `direct`, so the platform runs the command through a shell
    and `${PORT:-8080}` is resolved when the app starts, not during the build. Paths
    are shell-quoted; plain paths come out unchanged.
    """
    jar = shlex.quote(str(runtime_jar))
    fn_dir = shlex.quote(str(function_dir))
    command = f"java -jar {jar} serve {fn_dir} -p {PORT_PLACEHOLDER}"
    return LaunchModel(
        processes=[ProcessModel(type="web", command=command, args=[], direct=False, default=True)]
    )


def render_launch_toml(launch: LaunchModel) -> str:
    data = launch.model_dump()
    validate_launch(data)
    return tomli_w.dumps(data)


def write_launch_toml(layers_dir: Path, launch: LaunchModel) -> Path:
    path = layers_dir / LAUNCH_TOML
    try:
        path.write_text(render_launch_toml(launch), encoding="utf-8")
    except OSError as exc:
        raise LayerError("launch", exc) from exc
    return path
