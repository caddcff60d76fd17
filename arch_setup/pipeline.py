from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional, Protocol, Sequence

from .config import RunConfig, SetupManifest
from .errors import CommandFailedError, SetupError, UserDeclined
from .lib.command import Action, CmdResult, run_cmd
from .lib.env import TemplateVars
from .lib.probe import Probe
from .lib.prompt import Confirm, ask_yes_no
from .steps.base import StepState

logger = logging.getLogger(__name__)

SKIPPED = "skipped"
PLANNED = "planned"
COMPLETED = "completed"
FAILED = "failed"
DECLINED = "declined"


@dataclass(frozen=True)
class StepContext:
    """Everything a step may read. Shared by all steps of one run."""

    config: RunConfig
    manifest: SetupManifest
    runner: Callable[..., CmdResult] = run_cmd
    probe: Optional[Probe] = None
    confirm: Confirm = ask_yes_no
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    def __post_init__(self) -> None:
        # Probes go through the same runner as the steps unless given their own.
        if self.probe is None:
            object.__setattr__(self, "probe", Probe(self.runner))

    @property
    def vars(self) -> TemplateVars:
        return TemplateVars(self.environ, self.manifest.vars)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str
    best_effort: bool
    satisfied_message: str

    def probe(self, ctx: StepContext) -> StepState:
        ...

    def plan(self, ctx: StepContext) -> List[Action]:
        ...


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    status: str
    actions: List[Action] = field(default_factory=list)
    error: Optional[SetupError] = None
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PipelineResult:
    overall: str
    outcomes: List[StepOutcome]
    aborted_at: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.overall != "aborted"

    @property
    def ran_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes if o.status in {PLANNED, COMPLETED}]

    @property
    def skipped_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes if o.status == SKIPPED]

    @property
    def error(self) -> Optional[SetupError]:
        return self.outcomes[-1].error if self.aborted_at else None


def _execute(step: Step, ctx: StepContext, actions: Sequence[Action]) -> StepOutcome:
    warnings: List[str] = []
    for i, action in enumerate(actions, start=1):
        if action.description:
            logger.debug("[%s] %s", step.step_id, action.description)
        try:
            ctx.runner(action)
        except CommandFailedError as e:
            if not step.best_effort:
                return StepOutcome(step.step_id, FAILED, list(actions), error=e)
            # Repeats are independent.
            logger.warning("[%s] action %d/%d failed, continuing: %s", step.step_id, i, len(actions), e)
            warnings.append(str(e))
        except SetupError as e:
            return StepOutcome(step.step_id, FAILED, list(actions), error=e)
    return StepOutcome(step.step_id, COMPLETED, list(actions), warnings=warnings)


def run_step(step: Step, ctx: StepContext) -> StepOutcome:
    """Probe, then skip, plan (dry-run) or execute one step."""

    try:
        if step.probe(ctx) is StepState.SATISFIED:
            logger.info("[%s] %s", step.step_id, step.satisfied_message)
            return StepOutcome(step.step_id, SKIPPED)
        actions = step.plan(ctx)
    except UserDeclined:
        return StepOutcome(step.step_id, DECLINED)
    except SetupError as e:
        return StepOutcome(step.step_id, FAILED, error=e)

    if ctx.config.dry_run:
        if actions:
            logger.info("[DRY RUN] %s would execute:", step.step_id)
            for i, action in enumerate(actions, start=1):
                logger.info("  %d. %s", i, action.describe())
        else:
            logger.info("[DRY RUN] %s has nothing to execute", step.step_id)
        return StepOutcome(step.step_id, PLANNED, list(actions))

    return _execute(step, ctx, actions)


def run_pipeline(*, steps: Sequence[Step], ctx: StepContext) -> PipelineResult:
    """Run steps in declared order; stop at the first failed or declined step."""

    outcomes: List[StepOutcome] = []
    for step in steps:
        logger.debug("Running step %s", step.step_id)
        outcome = run_step(step, ctx)
        outcomes.append(outcome)

        if outcome.status == DECLINED:
            logger.info("Stopped at %s on user request", step.step_id)
            return PipelineResult(overall="declined", outcomes=outcomes)
        if outcome.status == FAILED:
            logger.error("Step %s failed (%s error): %s", step.step_id, outcome.error.kind, outcome.error)
            return PipelineResult(overall="aborted", outcomes=outcomes, aborted_at=step.step_id)

    return PipelineResult(overall="success", outcomes=outcomes)
