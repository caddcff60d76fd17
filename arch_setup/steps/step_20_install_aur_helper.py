from __future__ import annotations

from .base import ToolStep


class InstallAurHelperStep(ToolStep):
    """Bootstrap paru from the AUR: clone, build deps, toolchain, makepkg."""

    step_id = "20_install_aur_helper"
    section = "aur_helper"
