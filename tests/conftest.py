"""
Shared test fixtures: a recording runner, a scripted probe, and a context factory.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

import pytest

from arch_setup.config import RunConfig, SetupManifest, load_manifest
from arch_setup.errors import CommandFailedError, ToolUnavailableError
from arch_setup.lib.command import Action, CmdResult
from arch_setup.pipeline import StepContext


class FakeRunner:
    """Records every action; fails the ones a predicate selects."""

    def __init__(self, fail: Optional[Callable[[Action], bool]] = None, missing: Set[str] = frozenset()):
        self.calls: List[Action] = []
        self.fail = fail or (lambda action: False)
        self.missing = set(missing)
        self.on_success: Optional[Callable[[Action], None]] = None

    def __call__(self, action: Action, *, capture: bool = False, check: bool = True, quiet: bool = False) -> CmdResult:
        self.calls.append(action)
        if action.program in self.missing:
            raise ToolUnavailableError(action.program, "No such file or directory")
        rc = 1 if self.fail(action) else 0
        if rc and check:
            raise CommandFailedError(action, rc)
        if not rc and self.on_success:
            self.on_success(action)
        return CmdResult(argv=action.argv, returncode=rc)

    @property
    def programs(self) -> List[str]:
        return [a.program for a in self.calls]


class FakeProbe:
    """Answers probes from in-memory sets instead of the real system."""

    def __init__(self, tools=(), paths=(), files: Optional[Dict[str, str]] = None, succeeds: bool = True,
                 links: Optional[Dict[str, str]] = None):
        self.tools = set(tools)
        self.paths = set(paths)
        self.files = dict(files or {})
        self.links = dict(links or {})
        self.succeeds_result = succeeds
        self.queries: List[Action] = []

    def exists(self, tool: str) -> bool:
        return tool in self.tools

    def path_exists(self, path: str) -> bool:
        return path in self.paths or path in self.files or path in self.links

    def links_to(self, path: str, target: str) -> bool:
        return self.links.get(path) == target

    def file_contains(self, path: str, marker: str) -> bool:
        return marker in self.files.get(path, "")

    def succeeds(self, action: Action) -> bool:
        self.queries.append(action)
        return self.succeeds_result


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def default_manifest() -> SetupManifest:
    return load_manifest()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def make_ctx(home: Path, fake_runner: FakeRunner, fake_probe: FakeProbe, default_manifest: SetupManifest):
    def _make(dry_run: bool = False, verbose: bool = False, manifest=None, runner=None, probe=None,
              confirm=None, environ=None) -> StepContext:
        return StepContext(
            config=RunConfig(dry_run=dry_run, verbose=verbose),
            manifest=manifest if manifest is not None else default_manifest,
            runner=runner if runner is not None else fake_runner,
            probe=probe if probe is not None else fake_probe,
            confirm=confirm if confirm is not None else (lambda question: True),
            environ=environ if environ is not None else {"HOME": str(home), "USER": "tester"},
        )

    return _make
