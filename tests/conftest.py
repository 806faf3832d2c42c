"""Shared test fixtures for GovReady tests."""

import os
import subprocess
from datetime import datetime

import pytest

from govready.models.project_config import ProjectConfig
from govready.utils.config import Config
from govready.utils.lifecycle import ProcessLifecycle


SAMPLE_PROJECT_FILE = """\
# GovReady project configuration
API_VERSION = 0.1.0
SCAN_DIR = scans
PROFILE = test
CPE = /x/cpe.xml
"""


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Run the test from an empty directory with no GOVREADY_* overrides."""
    for name in list(os.environ):
        if name.startswith("GOVREADY_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    (tmp_path / "scans").mkdir()
    return tmp_path


@pytest.fixture
def project_file(project_dir):
    path = project_dir / "GovReadyfile"
    path.write_text(SAMPLE_PROJECT_FILE)
    return path


@pytest.fixture
def project():
    return ProjectConfig(
        api_version="0.1.0",
        scan_dir="scans",
        default_profile="test",
        cpe_dictionary_path="/x/cpe.xml",
    )


@pytest.fixture
def config(project_dir):
    cfg = Config()
    cfg.content_path = str(project_dir / "ssg-xccdf.xml")
    return cfg


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2026, 6, 15, 14, 30, 59)


@pytest.fixture
def lifecycle():
    lc = ProcessLifecycle()
    yield lc
    lc.release()


class FakeRunner:
    """Stand-in for subprocess.run that records commands.

    handlers maps a predicate over the argument list to a callable returning
    an exit code (or raising OSError); the first match wins.
    """

    def __init__(self):
        self.calls = []
        self.handlers = []

    def on(self, predicate, handler):
        self.handlers.append((predicate, handler))

    def __call__(self, command, check=False, **kwargs):
        self.calls.append(list(command))
        for predicate, handler in self.handlers:
            if predicate(command):
                code = handler(command)
                return subprocess.CompletedProcess(command, code, stdout="", stderr="")
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    def commands_containing(self, word):
        return [c for c in self.calls if word in c]


@pytest.fixture
def fake_run(monkeypatch):
    runner = FakeRunner()
    monkeypatch.setattr(subprocess, "run", runner)
    return runner


def option_value(command, option):
    return command[command.index(option) + 1]


def engine_writes_artifacts(exit_code=0):
    """Handler that behaves like an evaluation which writes both artifacts."""
    def handler(command):
        for option in ("--results", "--report"):
            with open(option_value(command, option), "w") as f:
                f.write("<xml/>")
            os.chmod(option_value(command, option), 0o600)
        return exit_code
    return handler


def fix_writes_script(command):
    with open(option_value(command, "--output"), "w") as f:
        f.write("#!/bin/bash\n")
    return 0


def is_eval(command):
    return "eval" in command


def is_fix(command):
    return "generate" in command
