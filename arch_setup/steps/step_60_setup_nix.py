from __future__ import annotations

from .base import ToolStep


class SetupNixStep(ToolStep):
    step_id = "60_setup_nix"
    section = "nix"
