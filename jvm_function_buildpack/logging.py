"""Build output helpers.

`BuildLogger` writes the human-facing build log the platform shows to users:

    [Installing Java function runtime]
    [INFO] Starting download of function runtime

Bracketed prefixes are literal text, so rich markup is disabled for every line.
`get_logger` returns the stdlib logger used for internal diagnostics.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console

from jvm_function_buildpack.errors import BuildFailed


def get_logger(name: str = "jvm_function_buildpack") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
    return logger


class BuildLogger:
    """Colored build log with the header/info/debug/warning/error vocabulary.

    Parameters
    ----------
    debug: bool
        Emit `debug` lines. Enabled by the platform's debug flag.
    console, err_console: Console | None
        Targets for regular and error output (stdout and stderr by default).
    """

    def __init__(
        self,
        debug: bool = False,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.debug_enabled = debug
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def _print(self, console: Console, text: str, style: str | None = None) -> None:
        console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)

    def header(self, msg: str) -> None:
        self._print(self.console, f"\n[{msg}]", style="bold magenta")

    def info(self, msg: str) -> None:
        self._print(self.console, f"[INFO] {msg}")

    def debug(self, msg: str) -> None:
        if self.debug_enabled:
            self._print(self.console, f"[DEBUG] {msg}")

    def warning(self, title: str, body: str) -> None:
        self._print(self.console, f"\n[WARNING: {title}]", style="bold yellow")
        self._print(self.console, body, style="yellow")

    def error(self, title: str, body: str) -> BuildFailed:
        """Print an error block to stderr and return the fatal exception to raise."""
        self._print(self.err_console, f"\n[ERROR: {title}]", style="bold red")
        self._print(self.err_console, body, style="red")
        return BuildFailed(title)
