from __future__ import annotations

import logging
import posixpath
from typing import Any, List, Tuple

from ..errors import PreconditionError
from ..lib.command import Action
from ..lib.env import render
from .base import ManifestStep, StepState, render_action

logger = logging.getLogger(__name__)


def repo_dir_name(url: str) -> str:
    name = posixpath.basename(url.rstrip("/"))
    return name[:-4] if name.endswith(".git") else name


class CloneWallpapersStep(ManifestStep):
    """Clone independent wallpaper repositories.

    Each clone stands alone, so one failed clone is reported and the rest
    still run.
    """

    step_id = "55_clone_wallpapers"
    section = "wallpapers"
    best_effort = True
    satisfied_message = "wallpapers already cloned"

    def _targets(self, ctx) -> List[Tuple[str, str]]:
        base_dir = self.option(ctx, "dir")
        repos: List[Any] = self.options(ctx).get("repos") or []
        if not isinstance(repos, list):
            raise PreconditionError(f"{ctx.manifest.source}: steps.{self.section}.repos must be a list")

        targets: List[Tuple[str, str]] = []
        for repo in repos:
            if isinstance(repo, dict):
                if not repo.get("url"):
                    raise PreconditionError(f"{ctx.manifest.source}: steps.{self.section}.repos entries need a url")
                url = str(repo["url"])
                name = str(repo.get("name") or repo_dir_name(url))
            else:
                url = str(repo)
                name = repo_dir_name(url)
            targets.append((render(url, ctx.vars), posixpath.join(base_dir, name)))
        return targets

    def probe(self, ctx) -> StepState:
        return StepState.of(all(ctx.probe.path_exists(dest) for _, dest in self._targets(ctx)))

    def plan(self, ctx) -> List[Action]:
        template = self.options(ctx).get("clone")
        if not template:
            raise PreconditionError(f"{ctx.manifest.source}: steps.{self.section}.clone is required")

        actions: List[Action] = []
        for url, dest in self._targets(ctx):
            if ctx.probe.path_exists(dest):
                logger.debug("[%s] %s already present", self.step_id, dest)
                continue
            actions.append(render_action(template, ctx.vars.child(url=url, dest=dest)))
        return actions
