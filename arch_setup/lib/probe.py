from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from ..errors import PreconditionError
from .command import Action, CmdResult, run_cmd

logger = logging.getLogger(__name__)

Runner = Callable[..., CmdResult]


class Probe:
    """Read-only checks of the current system state.

    Probes run in dry-run mode too: their answers decide whether a step
    prints a plan or a skip notice. If the lookup program itself cannot be
    started, ToolUnavailableError propagates instead of reading as "absent".
    Probe commands are logged at DEBUG only.
    """

    def __init__(self, runner: Runner = run_cmd) -> None:
        self.runner = runner

    def exists(self, tool: str) -> bool:
        r = self.runner(Action("which", (tool,)), capture=True, check=False, quiet=True)
        if r.ok:
            logger.debug("Found %s at %s", tool, r.stdout.strip())
        return r.ok

    def path_exists(self, path: str) -> bool:
        return Path(path).exists()

    def links_to(self, path: str, target: str) -> bool:
        if not os.path.islink(path):
            return False
        return os.path.realpath(path) == os.path.realpath(target)

    def file_contains(self, path: str, marker: str) -> bool:
        p = Path(path)
        if not p.is_file():
            return False
        try:
            return marker in p.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise PreconditionError(f"Cannot read {p}: {e}") from e

    def succeeds(self, action: Action) -> bool:
        return self.runner(action, capture=True, check=False, quiet=True).ok
