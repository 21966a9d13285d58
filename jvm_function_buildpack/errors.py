"""Typed exceptions for the function buildpack build phase.

Two layers:
- low-level errors (`FetchError`, `IntegrityError`) raised by helpers that know
  nothing about the build phase;
- `BuildpackError` subclasses carrying a user-facing `title` and `body`, which the
  pipeline renders through `BuildLogger.error` before failing the phase.
"""

from __future__ import annotations


class FetchError(RuntimeError):
    """Network, HTTP status or filesystem failure while downloading a resource."""


class IntegrityError(ValueError):
    """SHA-256 digest of a file does not match the expected value."""


class BuildFailed(Exception):
    """Terminal failure of the build phase. The message is the error title."""

    def __init__(self, title: str):
        super().__init__(title)
        self.title = title


class BuildpackError(Exception):
    """Base class for failures that end the build phase with a user-facing message.

    Attributes:
        title: Short identifying message, shown as the error header.
        body: Longer explanation with remediation hints.
    """

    title = "Build failed"

    def __init__(self, body: str = "", *, title: str | None = None):
        if title is not None:
            self.title = title
        super().__init__(self.title)
        self.body = body


class ConfigError(BuildpackError, ValueError):
    """Missing or malformed key in buildpack.toml."""

    title = "Invalid buildpack configuration"


class LayerError(BuildpackError, RuntimeError):
    title = "Layer could not be written"

    def __init__(self, name: str, reason: OSError):
        super().__init__(f"\nCould not write the `{name}` layer: {reason}\n")
        self.layer_name = name


class ProvisionError(BuildpackError, RuntimeError):
    """The function runtime could not be installed."""


class RuntimeDownloadError(ProvisionError):
    title = "Download of function runtime failed"

    def __init__(self, url: str):
        super().__init__(
            f"\nWe couldn't download the function runtime at {url}.\n\n"
            "This is usually caused by intermittent network issues. "
            "Please try again and contact us should the error persist.\n"
        )
        self.url = url


class RuntimeIntegrityError(ProvisionError):
    title = "Function runtime integrity check failed"

    def __init__(self) -> None:
        super().__init__(
            "\nWe could not verify the integrity of the downloaded function runtime.\n"
            "Please try again and contact us should the error persist.\n"
        )


class RuntimeInstallError(ProvisionError):
    title = "Function runtime installation failed"

    def __init__(self, reason: OSError):
        super().__init__(f"\nCould not install the downloaded function runtime: {reason}\n")


class DetectError(BuildpackError, RuntimeError):
    """Function detection ended without exactly one detected function.

    Attributes:
        exit_code: Detector exit code, or None when the process had no exit code
            (terminated by a signal, or never started).
    """

    title = "Detection failed"

    def __init__(self, body: str, exit_code: int | None = None):
        super().__init__(body)
        self.exit_code = exit_code


class NoFunctionFoundError(DetectError):
    title = "No functions found"

    def __init__(self) -> None:
        super().__init__(
            "\nYour project does not seem to contain any Java functions.\n"
            "The output above might contain information about issues with your function.\n",
            exit_code=1,
        )


class MultipleFunctionsFoundError(DetectError):
    title = "Multiple functions found"

    def __init__(self) -> None:
        super().__init__(
            "\nYour project contains multiple Java functions.\n"
            "Currently, only projects that contain exactly one (1) function are supported.\n",
            exit_code=2,
        )


class DetectorInternalError(DetectError):
    def __init__(self, exit_code: int):
        super().__init__(
            f'Function detection failed with internal error "{exit_code}"', exit_code=exit_code
        )


class DetectorUnexpectedExitError(DetectError):
    def __init__(self, exit_code: int | None):
        if exit_code is None:
            reason = "without an exit code"
        else:
            reason = f"with unexpected error code {exit_code}"
        super().__init__(
            f"\nFunction detection failed {reason}.\n"
            "The output above might contain hints what caused this error to happen.\n",
            exit_code=exit_code,
        )


class DetectorLaunchError(DetectError):
    def __init__(self, command: str, reason: str):
        super().__init__(f"\nCould not start the function detector ({command}): {reason}\n")


class ManifestParseError(BuildpackError, ValueError):
    title = "Detection output could not be read"
