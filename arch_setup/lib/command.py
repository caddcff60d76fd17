from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import CommandFailedError, ToolUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Action:
    """One external command invocation."""

    program: str
    args: tuple[str, ...] = ()
    cwd: Optional[str] = None
    stdin_path: Optional[str] = None
    input_text: Optional[str] = None
    description: str = ""

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def describe(self) -> str:
        text = _fmt_argv(self.argv)
        if self.cwd:
            text = f"(cd {shlex.quote(self.cwd)} && {text})"
        if self.stdin_path:
            text += f" < {shlex.quote(self.stdin_path)}"
        elif self.input_text is not None:
            lines = len(self.input_text.splitlines())
            text += f" <<< [{lines} line(s) of input]"
        return text


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(action: Action, *, capture: bool = False, check: bool = True, quiet: bool = False) -> CmdResult:
    """Run an action with consistent logging.

    - Always logs the command (at DEBUG when quiet=True, as probes do).
    - stdout is inherited unless capture=True; captured bytes are decoded
      permissively so odd output never breaks the runner itself.
    - A program that cannot be spawned raises ToolUnavailableError; a program
      that exits non-zero raises CommandFailedError when check=True.
    """

    argv = action.argv
    logger.log(logging.DEBUG if quiet else logging.INFO, "CMD %s", action.describe())

    stdin_file = None
    try:
        if action.input_text is None and action.stdin_path:
            try:
                stdin_file = open(action.stdin_path, "rb")
            except OSError as e:
                raise ToolUnavailableError(action.program, f"cannot open stdin {action.stdin_path}: {e}") from e

        try:
            p = subprocess.run(
                argv,
                input=action.input_text.encode("utf-8") if action.input_text is not None else None,
                stdin=stdin_file,
                stdout=subprocess.PIPE if capture else None,
                cwd=action.cwd,
            )
        except OSError as e:
            raise ToolUnavailableError(action.program, e.strerror or str(e)) from e
    finally:
        if stdin_file is not None:
            stdin_file.close()

    stdout = ""
    if capture and p.stdout:
        stdout = p.stdout.decode("utf-8", errors="replace")
        logger.debug("STDOUT %s", stdout.strip())

    if check and p.returncode != 0:
        raise CommandFailedError(action, p.returncode)

    return CmdResult(argv=argv, returncode=p.returncode, stdout=stdout)
