from __future__ import annotations

import logging
from typing import List

from ..errors import PreconditionError
from .base import ManifestStep, StepState

logger = logging.getLogger(__name__)


class CheckDependenciesStep(ManifestStep):
    step_id = "10_check_deps"
    section = "dependencies"
    satisfied_message = "all required tools present"

    def _tools(self, ctx) -> List[str]:
        tools = self.options(ctx).get("tools") or []
        if not isinstance(tools, list):
            raise PreconditionError(f"{ctx.manifest.source}: steps.{self.section}.tools must be a list")
        return [str(t) for t in tools]

    def probe(self, ctx) -> StepState:
        missing = [t for t in self._tools(ctx) if not ctx.probe.exists(t)]
        if missing:
            logger.info("[%s] missing tools: %s", self.step_id, ", ".join(missing))
        return StepState.of(not missing)
