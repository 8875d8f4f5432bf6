"""Shared fixtures: a scripted stand-in for subprocess.run and a run context."""
import logging
import subprocess

import pytest

from desktop_setup import logging_utils
from desktop_setup.config import SetupConfig
from desktop_setup.lib import command, system
from desktop_setup.pipeline import RunContext


class FakeCommands:
    """Records every argv and answers from rules matched by argv prefix.

    Commands without a rule succeed with empty output.
    """

    def __init__(self):
        self.calls = []
        self.kwargs = []
        self._rules = []

    def on(self, *prefix, returncode=0, stdout="", stderr="", effect=None):
        # Later rules win over earlier ones.
        self._rules.insert(0, (tuple(prefix), returncode, stdout, stderr, effect))

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        for prefix, returncode, stdout, stderr, effect in self._rules:
            if tuple(argv[: len(prefix)]) == prefix:
                if effect is not None:
                    effect(argv)
                return subprocess.CompletedProcess(argv, returncode, stdout, stderr)
        return subprocess.CompletedProcess(argv, 0, "", "")

    def matching(self, *prefix):
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture
def fake_commands(monkeypatch):
    fake = FakeCommands()
    monkeypatch.setattr(command.subprocess, "run", fake)
    return fake


@pytest.fixture
def on_path(monkeypatch):
    """Set of binary names that shutil.which should report as installed."""
    present = set()
    monkeypatch.setattr(system.shutil, "which", lambda name: f"/usr/bin/{name}" if name in present else None)
    return present


@pytest.fixture
def ctx(tmp_path):
    config = SetupConfig(
        home=str(tmp_path),
        user="alice",
        config_home=str(tmp_path / ".config"),
        sudo=False,
        debian_version="12",
    )
    return RunContext(config=config)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger()
    for h in list(logging_utils._installed_handlers):
        root.removeHandler(h)
        h.close()
    logging_utils._installed_handlers.clear()
