"""Console protocol shared by the deployment components.

Deployment code only needs tagged output; it accepts anything with these
methods, so it can run under the rich CLI console or under plain stdout.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import ConsoleRenderable


class ConsoleLike(Protocol):
    def print(self, msg: ConsoleRenderable | str | None = None) -> None: ...

    def info(self, msg: str) -> None: ...

    def step(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def ok(self, msg: str) -> None: ...


class StdoutConsole:
    """Plain-text console writing tagged lines to stdout."""

    def _emit(self, tag: str, msg: str) -> None:
        print(f"[{tag}] {msg}")

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        print("" if msg is None else msg)

    def info(self, msg: str) -> None:
        self._emit("INFO", msg)

    def step(self, msg: str) -> None:
        self._emit("STEP", msg)

    def warn(self, msg: str) -> None:
        self._emit("WARN", msg)

    def error(self, msg: str) -> None:
        self._emit("ERROR", msg)

    def ok(self, msg: str) -> None:
        self._emit("OK", msg)


def coalesce_console(console: ConsoleLike | None) -> ConsoleLike:
    return StdoutConsole() if console is None else console
