from __future__ import annotations

from .base import MarkerStep


class ConfigureRepositoryStep(MarkerStep):
    """Append a third-party repository block to pacman.conf once."""

    step_id = "30_configure_repository"
    section = "repository"
