"""Test doubles for external commands and the operator console.

External commands never run in unit tests: components receive a
RecordingRunner that records every command line and answers from a table of
canned results.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from src.cli.deployment.shell_commands import CommandResult


def ok(stdout: str = "") -> CommandResult:
    return CommandResult(success=True, stdout=stdout)


def fail(stderr: str = "boom", returncode: int = 1) -> CommandResult:
    return CommandResult(success=False, stderr=stderr, returncode=returncode)


class RecordingRunner:
    """CommandRunner double.

    Responses are matched by command prefix in registration order. A prefix
    registered with several results hands them out one per call and then
    keeps repeating the last one. Unmatched commands succeed with no output.
    """

    def __init__(self, project_root: Path = Path(".")) -> None:
        self.project_root = project_root
        self.calls: list[list[str]] = []
        self.cwds: list[Path | None] = []
        self._responses: list[tuple[tuple[str, ...], list[CommandResult]]] = []

    def respond(self, prefix: Sequence[str], *results: CommandResult) -> None:
        self._responses.append((tuple(prefix), list(results)))

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
    ) -> CommandResult:
        cmd = list(cmd)
        self.calls.append(cmd)
        self.cwds.append(cwd)
        for prefix, results in self._responses:
            if tuple(cmd[: len(prefix)]) == prefix:
                return results.pop(0) if len(results) > 1 else results[0]
        return ok()

    def called(self, *prefix: str) -> list[list[str]]:
        """Calls whose command line starts with ``prefix``."""
        return [call for call in self.calls if tuple(call[: len(prefix)]) == prefix]

    def index_of(self, *prefix: str) -> int:
        for i, call in enumerate(self.calls):
            if tuple(call[: len(prefix)]) == prefix:
                return i
        raise ValueError(f"{prefix} was never called")


class ScriptedConsole:
    """Console double that answers prompts from a script and records output."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers = list(answers)
        self.prompts: list[tuple[str, str, bool]] = []
        self.messages: list[tuple[str, str]] = []

    def _record(self, kind: str, msg: object) -> None:
        self.messages.append((kind, "" if msg is None else str(msg)))

    def print(self, msg: object = None) -> None:
        self._record("print", msg)

    def info(self, msg: str) -> None:
        self._record("info", msg)

    def step(self, msg: str) -> None:
        self._record("step", msg)

    def warn(self, msg: str) -> None:
        self._record("warn", msg)

    def error(self, msg: str) -> None:
        self._record("error", msg)

    def ok(self, msg: str) -> None:
        self._record("ok", msg)

    def print_subheader(self, title: str) -> None:
        self._record("subheader", title)

    def prompt_input(self, label: str, default: str = "", *, secret: bool = False) -> str:
        self.prompts.append((label, default, secret))
        answer = self.answers.pop(0) if self.answers else ""
        return answer.strip() or default

    def text(self, kind: str | None = None) -> str:
        return "\n".join(m for k, m in self.messages if kind is None or k == kind)


