"""Utilities for executing external commands and streaming their output."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Sequence, TextIO
import os
import platform
import shlex
import subprocess
import sys


LineObserver = Callable[[str], None]

LAUNCH_FAILURE_RETURNCODE = 127
"""Return code reported when the executable could not be started."""


def shell_prefix_for(system: str | None = None) -> tuple[str, ...]:
    """Return the command prefix needed to launch programs on ``system``.

    Windows ships build tools such as ``mvn`` as ``.cmd`` scripts that
    :class:`subprocess.Popen` cannot start directly, so commands go through
    ``cmd /c`` there.
    """

    name = (system or platform.system()).lower()
    if name.startswith("win"):
        return ("cmd", "/c")
    return ()


@dataclass
class CommandResult:
    """Represents the outcome of an executed command."""

    command: Sequence[str]
    returncode: int
    stdout: str
    stderr: str
    streamed: bool = False


class CommandError(RuntimeError):
    """Raised when a command fails."""

    def __init__(self, result: CommandResult):
        message = f"Command failed with exit code {result.returncode}: {' '.join(map(shlex.quote, result.command))}"
        if result.streamed:
            message = f"{message}\nstdout/stderr already streamed above."
        else:
            message = (
                f"{message}\n"
                f"stdout: {result.stdout}\n"
                f"stderr: {result.stderr}"
            )
        super().__init__(message)
        self.result = result


class CommandRunner:
    """Abstract command runner interface."""

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = True,
        note: str | None = None,
        stream: bool = False,
        on_line: LineObserver | None = None,
    ) -> CommandResult:
        raise NotImplementedError

    def format_command(self, command: Sequence[str]) -> str:
        return " ".join(shlex.quote(part) for part in command)


class SubprocessCommandRunner(CommandRunner):
    """Command runner that executes commands via :mod:`subprocess`.

    ``shell_prefix`` is prepended to every command; see :func:`shell_prefix_for`.
    Streamed output is echoed to ``output`` (``sys.stdout`` by default).
    """

    def __init__(self, *, shell_prefix: Sequence[str] = (), output: TextIO | None = None) -> None:
        self.shell_prefix = tuple(shell_prefix)
        self._output = output

    @staticmethod
    def _merge_environment(env: Mapping[str, str] | None) -> Dict[str, str] | None:
        if env is None:
            return None
        merged = os.environ.copy()
        merged.update(env)
        return merged

    def _finalize(self, result: CommandResult, *, check: bool) -> CommandResult:
        if check and result.returncode != 0:
            raise CommandError(result)
        return result

    def _launch_failure(self, command: Sequence[str], exc: OSError, *, streamed: bool) -> CommandResult:
        return CommandResult(
            command=command,
            returncode=LAUNCH_FAILURE_RETURNCODE,
            stdout="",
            stderr=str(exc),
            streamed=streamed,
        )

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = True,
        note: str | None = None,
        stream: bool = False,
        on_line: LineObserver | None = None,
    ) -> CommandResult:
        merged_env = self._merge_environment(env)
        argv = [*self.shell_prefix, *command]
        if not stream:
            try:
                process = subprocess.run(
                    argv,
                    cwd=str(cwd) if cwd else None,
                    env=merged_env,
                    capture_output=True,
                    text=True,
                    check=False,
                )
            except OSError as exc:
                return self._finalize(self._launch_failure(command, exc, streamed=False), check=check)
            if on_line is not None:
                for line in process.stdout.splitlines():
                    on_line(line)
            return self._finalize(
                CommandResult(
                    command=command,
                    returncode=process.returncode,
                    stdout=process.stdout,
                    stderr=process.stderr,
                ),
                check=check,
            )

        try:
            process = subprocess.Popen(
                argv,
                cwd=str(cwd) if cwd else None,
                env=merged_env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as exc:
            return self._finalize(self._launch_failure(command, exc, streamed=True), check=check)

        output = self._output or sys.stdout
        lines: List[str] = []
        try:
            assert process.stdout is not None
            with process.stdout:
                for raw in process.stdout:
                    line = raw.rstrip("\r\n")
                    lines.append(line)
                    print(line, file=output, flush=True)
                    if on_line is not None:
                        on_line(line)
            returncode = process.wait()
        except KeyboardInterrupt:
            process.kill()
            process.wait()
            raise

        return self._finalize(
            CommandResult(
                command=command,
                returncode=returncode,
                stdout="\n".join(lines),
                stderr="",
                streamed=True,
            ),
            check=check,
        )
