from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from ..errors import PreconditionError
from ..lib.command import Action
from ..lib.env import TemplateVars, render
from .base import ManifestStep, StepState, render_action

logger = logging.getLogger(__name__)


def filter_package_list(lines: Iterable[str]) -> List[str]:
    """Drop comments and blanks, de-dup while preserving order."""

    packages: List[str] = []
    for line in lines:
        name = str(line).split("#", 1)[0].strip()
        if name and name not in packages:
            packages.append(name)
    return packages


class InstallPackagesStep(ManifestStep):
    step_id = "40_install_packages"
    section = "packages"
    satisfied_message = "all packages installed"

    def packages(self, ctx) -> List[str]:
        opts = self.options(ctx)
        lines: List[str] = [str(p) for p in (opts.get("list") or [])]

        list_file = opts.get("file")
        if list_file:
            p = Path(render(str(list_file), ctx.vars))
            if not p.is_file():
                raise PreconditionError(f"Package list not found: {p}")
            try:
                lines.extend(p.read_text(encoding="utf-8", errors="replace").splitlines())
            except OSError as e:
                raise PreconditionError(f"Cannot read package list {p}: {e}") from e

        return filter_package_list(lines)

    def variables(self, ctx) -> TemplateVars:
        return ctx.vars.child(packages="\n".join(self.packages(ctx)) + "\n")

    def probe(self, ctx) -> StepState:
        packages = self.packages(ctx)
        if not packages:
            return StepState.SATISFIED
        query = self.options(ctx).get("query") or {"program": "pacman", "args": ["-Q"]}
        base = render_action(query, ctx.vars)
        return StepState.of(ctx.probe.succeeds(Action(base.program, (*base.args, *packages))))

    def plan(self, ctx) -> List[Action]:
        logger.debug("[%s] %d package(s) requested", self.step_id, len(self.packages(ctx)))
        return super().plan(ctx)
