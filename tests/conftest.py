"""Shared fixtures: a fake shell, an in-memory config store and scripted prompts."""
import subprocess

import pytest

from gitboot.config import load_config
from gitboot.core import GitbootError

PATCHED_MODULES = [
    "gitboot.installer",
    "gitboot.gitconfig",
    "gitboot.sshkeys",
    "gitboot.connectivity",
]


class FakeShell:
    """Records commands instead of running them."""

    def __init__(self):
        self.commands = []
        self.available = set()
        self.responses = {}
        self.effects = {}
        self.install_provides_git = True

    def respond(self, prefix, returncode=0, stdout="", stderr=""):
        self.responses[tuple(prefix)] = (returncode, stdout, stderr)

    def on(self, prefix, effect):
        self.effects[tuple(prefix)] = effect

    def _lookup(self, table, cmd):
        best = None
        for prefix in table:
            if tuple(cmd[: len(prefix)]) == prefix:
                if best is None or len(prefix) > len(best):
                    best = prefix
        return table.get(best) if best is not None else None

    def command_exists(self, name):
        return name in self.available

    def run_command(self, cmd, capture_output=False, check=True, echo=True):
        cmd = list(cmd)
        self.commands.append(cmd)
        bare = cmd[1:] if cmd and cmd[0] == "sudo" else cmd

        effect = self._lookup(self.effects, bare)
        if effect is not None:
            effect(bare)

        returncode, stdout, stderr = self._lookup(self.responses, bare) or (0, "", "")
        if check and returncode != 0:
            raise GitbootError(f"Command failed: {' '.join(cmd)}\n{stderr}")

        installs_git = "install" in bare and any(part.lower().startswith("git") for part in bare[1:])
        if returncode == 0 and self.install_provides_git and installs_git:
            self.available.add("git")
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)

    def ran(self, prefix):
        """Return True if any command (sudo stripped) starts with ``prefix``."""
        prefix = list(prefix)
        for cmd in self.commands:
            bare = cmd[1:] if cmd and cmd[0] == "sudo" else cmd
            if bare[: len(prefix)] == prefix:
                return True
        return False


class FakeConfigStore:
    """Dict-backed stand-in for the global git configuration."""

    def __init__(self, values=None, failing_keys=()):
        self.values = dict(values or {})
        self.failing_keys = set(failing_keys)

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        if key in self.failing_keys:
            raise GitbootError(f"could not write {key}")
        self.values[key] = value

    def entries(self):
        return list(self.values.items())


class ScriptedPrompter:
    """Answers prompts from a fixed script, in order."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.questions = []

    def _next(self, question, kind):
        self.questions.append(question)
        assert self.answers, f"Unexpected prompt: {question!r}"
        answer = self.answers.pop(0)
        assert isinstance(answer, kind), f"Expected {kind.__name__} answer for {question!r}, got {answer!r}"
        return answer

    def ask(self, question, default=""):
        return self._next(question, str) or default

    def confirm(self, question, default=False):
        return self._next(question, bool)


@pytest.fixture
def shell(monkeypatch):
    fake = FakeShell()
    for module in PATCHED_MODULES:
        monkeypatch.setattr(f"{module}.run_command", fake.run_command)
    monkeypatch.setattr("gitboot.installer.command_exists", fake.command_exists)
    monkeypatch.setattr("gitboot.installer.is_root", lambda: True)
    monkeypatch.delenv("MSYSTEM", raising=False)
    return fake


@pytest.fixture
def store():
    return FakeConfigStore()


@pytest.fixture
def settings(tmp_path):
    return load_config(tmp_path / "missing.toml")


@pytest.fixture
def home(monkeypatch, tmp_path):
    from pathlib import Path

    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path
