"""Detector exit status contract.

The detector (`java -jar runtime.jar bundle <app> <out>`) reports its result through
the exit code only:

    0     exactly one function found, `function-bundle.toml` written
    1     no function found
    2     more than one function found
    3..6  detector-internal failure
    *     anything else, including termination by a signal (no code)

`classify_exit_code` maps every possible status to exactly one outcome variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from jvm_function_buildpack.errors import (
    DetectError,
    DetectorInternalError,
    DetectorUnexpectedExitError,
    MultipleFunctionsFoundError,
    NoFunctionFoundError,
)

INTERNAL_ERROR_CODES = range(3, 7)


@dataclass(frozen=True)
class DetectionSucceeded:
    exit_code: int = 0

    def to_error(self) -> None:
        return None


@dataclass(frozen=True)
class NoFunctionFound:
    exit_code: int = 1

    def to_error(self) -> DetectError:
        return NoFunctionFoundError()


@dataclass(frozen=True)
class MultipleFunctionsFound:
    exit_code: int = 2

    def to_error(self) -> DetectError:
        return MultipleFunctionsFoundError()


@dataclass(frozen=True)
class DetectorInternalFailure:
    exit_code: int

    def to_error(self) -> DetectError:
        return DetectorInternalError(self.exit_code)


@dataclass(frozen=True)
class DetectorUnexpectedExit:
    exit_code: int | None

    def to_error(self) -> DetectError:
        return DetectorUnexpectedExitError(self.exit_code)


DetectOutcome = Union[
    DetectionSucceeded,
    NoFunctionFound,
    MultipleFunctionsFound,
    DetectorInternalFailure,
    DetectorUnexpectedExit,
]


def classify_exit_code(code: int | None) -> DetectOutcome:
    """Map a detector exit code (None when killed by a signal) to its outcome."""
    if code == 0:
        return DetectionSucceeded()
    if code == 1:
        return NoFunctionFound()
    if code == 2:
        return MultipleFunctionsFound()
    if code is not None and code in INTERNAL_ERROR_CODES:
        return DetectorInternalFailure(code)
    return DetectorUnexpectedExit(code)
