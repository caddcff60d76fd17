from __future__ import annotations

from .base import ManifestStep, StepState


class ApplyHomeConfigStep(ManifestStep):
    """Replace home-manager's generated home.nix with the dotfiles one and switch.

    Done once `file` is a symlink to `source`; the link is the step's own work.
    """

    step_id = "80_apply_home_config"
    section = "home_config"
    satisfied_message = "home-manager config already linked"

    def probe(self, ctx) -> StepState:
        path = self.option(ctx, "file")
        source = self.option(ctx, "source")
        return StepState.of(ctx.probe.links_to(path, source))
