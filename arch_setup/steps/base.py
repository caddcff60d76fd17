from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from ..errors import PreconditionError
from ..lib.command import Action
from ..lib.env import TemplateVars, render, render_all

if TYPE_CHECKING:
    from ..pipeline import StepContext

logger = logging.getLogger(__name__)


class StepState(enum.Enum):
    SATISFIED = "satisfied"
    NOT_SATISFIED = "not_satisfied"

    @classmethod
    def of(cls, satisfied: bool) -> "StepState":
        return cls.SATISFIED if satisfied else cls.NOT_SATISFIED


def render_action(template: Mapping[str, Any], variables: TemplateVars) -> Action:
    """Turn one manifest entry into an Action.

    Template keys: program, args, cwd, stdin, input, description.
    """

    cwd = template.get("cwd")
    stdin_path = template.get("stdin")
    text = template.get("input")
    return Action(
        program=render(str(template["program"]), variables),
        args=tuple(render_all(template.get("args"), variables)),
        cwd=render(str(cwd), variables) if cwd else None,
        stdin_path=render(str(stdin_path), variables) if stdin_path else None,
        input_text=render(str(text), variables) if text is not None else None,
        description=str(template.get("description") or ""),
    )


class ManifestStep:
    """Step whose actions come from a manifest section.

    Subclasses decide what "already done" means in probe(); plan() renders
    the section's action templates in order. An entry with `unless_exists`
    is left out of the plan when that path is already there.
    """

    step_id = ""
    section = ""
    best_effort = False
    satisfied_message = "already done"

    def options(self, ctx: "StepContext") -> Dict[str, Any]:
        return ctx.manifest.section(self.section)

    def variables(self, ctx: "StepContext") -> TemplateVars:
        return ctx.vars

    def option(self, ctx: "StepContext", key: str, default: Optional[str] = None) -> str:
        value = self.options(ctx).get(key, default)
        if value is None:
            raise PreconditionError(f"{ctx.manifest.source}: steps.{self.section}.{key} is required")
        return render(str(value), self.variables(ctx))

    def probe(self, ctx: "StepContext") -> StepState:
        raise NotImplementedError

    def plan(self, ctx: "StepContext") -> List[Action]:
        variables = self.variables(ctx)
        actions: List[Action] = []
        for template in ctx.manifest.actions(self.section):
            guard = template.get("unless_exists")
            if guard:
                path = render(str(guard), variables)
                if ctx.probe.path_exists(path):
                    logger.debug("[%s] %s exists, not planning %s", self.step_id, path, template["program"])
                    continue
            actions.append(render_action(template, variables))
        return actions


class ToolStep(ManifestStep):
    """Satisfied when the section's `tool` resolves on PATH."""

    satisfied_message = "already installed"

    def probe(self, ctx: "StepContext") -> StepState:
        tool = self.option(ctx, "tool")
        return StepState.of(ctx.probe.exists(tool))


class MarkerStep(ManifestStep):
    """Satisfied when the section's `file` already contains `marker`."""

    satisfied_message = "already configured"

    def probe(self, ctx: "StepContext") -> StepState:
        path = self.option(ctx, "file")
        marker = self.option(ctx, "marker")
        return StepState.of(ctx.probe.file_contains(path, marker))


class PathStep(ManifestStep):
    """Satisfied when the section's `path` exists."""

    def probe(self, ctx: "StepContext") -> StepState:
        return StepState.of(ctx.probe.path_exists(self.option(ctx, "path")))
