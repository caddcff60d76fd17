"""
Tests for logging setup: file handler, fallback, and idempotence.
"""

import logging
import sys
from pathlib import Path

import pytest

from arch_setup.logging_utils import configure_logging


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield root
    for h in root.handlers:
        if h not in before:
            h.close()
    root.handlers = before
    root.setLevel(level)
    for attr in ("_arch_setup_configured", "_arch_setup_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


class TestConfigureLogging:
    def test_writes_requested_file(self, clean_root, tmp_path: Path):
        target = tmp_path / "logs" / "arch-setup.log"
        assert configure_logging(log_path=str(target)) == str(target)
        logging.getLogger("arch_setup.test").debug("hello from test")
        for h in clean_root.handlers:
            h.flush()
        assert "hello from test" in target.read_text()

    def test_second_call_is_a_no_op(self, clean_root, tmp_path: Path):
        first = configure_logging(log_path=str(tmp_path / "a.log"))
        count = len(clean_root.handlers)
        assert configure_logging(log_path=str(tmp_path / "b.log")) == first
        assert len(clean_root.handlers) == count

    def test_console_level_follows_verbose(self, clean_root, tmp_path: Path):
        configure_logging(log_path=str(tmp_path / "a.log"), verbose=True)
        console = [h for h in clean_root.handlers if type(h) is logging.StreamHandler]
        assert console and console[-1].level == logging.DEBUG

    def test_console_writes_to_stdout(self, clean_root, tmp_path: Path):
        configure_logging(log_path=str(tmp_path / "a.log"))
        console = [h for h in clean_root.handlers if type(h) is logging.StreamHandler]
        assert console[-1].stream is sys.stdout

    def test_falls_back_to_working_directory(self, clean_root, tmp_path: Path, monkeypatch):
        blocker = tmp_path / "file"
        blocker.write_text("")
        monkeypatch.chdir(tmp_path)
        chosen = configure_logging(log_path=str(blocker / "sub" / "x.log"), also_console=False)
        assert chosen == str(Path.cwd() / "arch-setup.log")
