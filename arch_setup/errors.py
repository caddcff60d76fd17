from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .lib.command import Action


class SetupError(RuntimeError):
    """Base class for failures that stop a step."""

    kind = "error"


class ToolUnavailableError(SetupError):
    """A program could not be started at all (missing binary, permissions)."""

    kind = "environment"

    def __init__(self, program: str, reason: str) -> None:
        super().__init__(f"Cannot run {program}: {reason}")
        self.program = program
        self.reason = reason


class CommandFailedError(SetupError):
    """A program ran and exited non-zero."""

    kind = "command"

    def __init__(self, action: "Action", returncode: int) -> None:
        super().__init__(f"Command failed ({returncode}): {action.describe()}")
        self.action = action
        self.returncode = returncode


class PreconditionError(SetupError):
    """Missing environment variable, file or manifest entry."""

    kind = "precondition"


class UserDeclined(Exception):
    """The operator chose not to continue. Not a failure."""

    def __init__(self, message: str = "Aborted.", step_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.step_id = step_id
