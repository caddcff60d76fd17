"""
Tests for probes: tool lookup, paths, and marker checks.
"""

import os
import sys
from pathlib import Path

import pytest

from arch_setup.errors import PreconditionError, ToolUnavailableError
from arch_setup.lib.command import Action, run_cmd
from arch_setup.lib.probe import Probe

from tests.conftest import FakeRunner


class TestProbe:
    def test_exists_uses_which(self):
        runner = FakeRunner()
        assert Probe(runner).exists("git")
        assert runner.calls == [Action("which", ("git",))]

    def test_exists_false_when_lookup_fails(self):
        runner = FakeRunner(fail=lambda a: a.args == ("paru",))
        assert not Probe(runner).exists("paru")

    def test_lookup_spawn_failure_propagates(self):
        runner = FakeRunner(missing={"which"})
        with pytest.raises(ToolUnavailableError):
            Probe(runner).exists("git")

    def test_path_exists(self, tmp_path: Path):
        probe = Probe(FakeRunner())
        assert probe.path_exists(str(tmp_path))
        assert not probe.path_exists(str(tmp_path / "missing"))

    def test_file_contains(self, tmp_path: Path):
        conf = tmp_path / "pacman.conf"
        conf.write_bytes(b"[options]\n\xff\n[chaotic-aur]\nInclude = x\n")
        probe = Probe(FakeRunner())
        assert probe.file_contains(str(conf), "[chaotic-aur]")
        assert not probe.file_contains(str(conf), "[multilib]")

    def test_file_contains_missing_file(self, tmp_path: Path):
        assert not Probe(FakeRunner()).file_contains(str(tmp_path / "nope"), "x")

    def test_succeeds(self):
        runner = FakeRunner(fail=lambda a: "missing-pkg" in a.args)
        probe = Probe(runner)
        assert probe.succeeds(Action("pacman", ("-Q", "zsh")))
        assert not probe.succeeds(Action("pacman", ("-Q", "missing-pkg")))

    def test_unreadable_file_is_precondition_error(self, tmp_path: Path, monkeypatch):
        conf = tmp_path / "pacman.conf"
        conf.write_text("[options]\n")

        def _denied(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "read_text", _denied)
        with pytest.raises(PreconditionError):
            Probe(FakeRunner()).file_contains(str(conf), "[chaotic-aur]")

    def test_links_to(self, tmp_path: Path):
        source = tmp_path / "home.nix"
        source.write_text("{ }\n")
        link = tmp_path / "link.nix"
        os.symlink(source, link)
        probe = Probe(FakeRunner())
        assert probe.links_to(str(link), str(source))
        assert not probe.links_to(str(source), str(source))
        assert not probe.links_to(str(link), str(tmp_path / "other.nix"))
        assert not probe.links_to(str(tmp_path / "missing"), str(source))


class TestProbeLogging:
    def test_lookups_stay_off_the_console(self, caplog):
        probe = Probe(run_cmd)
        with caplog.at_level("INFO"):
            assert probe.succeeds(Action(sys.executable, ("-c", "pass")))
        assert "CMD" not in caplog.text

    def test_lookups_are_in_the_debug_log(self, caplog):
        with caplog.at_level("DEBUG"):
            Probe(run_cmd).succeeds(Action(sys.executable, ("-c", "pass")))
        assert "CMD" in caplog.text
