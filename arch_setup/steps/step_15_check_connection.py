from __future__ import annotations

import logging
from typing import List

from ..errors import ToolUnavailableError, UserDeclined
from ..lib.command import Action
from .base import ManifestStep, StepState, render_action

logger = logging.getLogger(__name__)


class CheckConnectionStep(ManifestStep):
    """Ask before going on without a verified network connection."""

    step_id = "15_check_connection"
    section = "connection"
    satisfied_message = "network is reachable"

    def probe(self, ctx) -> StepState:
        template = self.options(ctx).get("probe")
        if not template:
            return StepState.NOT_SATISFIED
        action = render_action(template, self.variables(ctx))
        try:
            return StepState.of(ctx.probe.succeeds(action))
        except ToolUnavailableError as e:
            logger.warning("[%s] cannot check connectivity: %s", self.step_id, e)
            return StepState.NOT_SATISFIED

    def plan(self, ctx) -> List[Action]:
        question = str(self.options(ctx).get("question") or "Continue anyway?")
        if ctx.config.dry_run:
            logger.info("[DRY RUN] %s would ask: %s", self.step_id, question)
            return []

        logger.warning("Could not verify network connection")
        if not ctx.confirm(question):
            raise UserDeclined(step_id=self.step_id)
        return []
