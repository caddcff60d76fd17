from __future__ import annotations

from .base import ToolStep


class InitHomeManagerStep(ToolStep):
    """Install home-manager on top of nix. Generates a default home.nix."""

    step_id = "70_init_home_manager"
    section = "home_manager"
