from __future__ import annotations

from .base import PathStep


class DeployDotfilesStep(PathStep):
    step_id = "50_deploy_dotfiles"
    section = "dotfiles"
    satisfied_message = "dotfiles already deployed"
