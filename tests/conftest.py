import shutil
import subprocess
from types import SimpleNamespace

import pytest

from gy.config import ConfigManager
from gy.llm import LLMResponse


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the config file at a temp home and drop real credentials."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("GY_MODEL", raising=False)
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.setattr("gy.config._manager", ConfigManager())
    return home


class FakeMessages:
    """Stands in for Anthropic().messages."""

    def __init__(self, text="feat: add greeting helper", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        content = [] if self.text is None else [SimpleNamespace(type="text", text=self.text)]
        return SimpleNamespace(
            content=content,
            usage=SimpleNamespace(input_tokens=40, output_tokens=8),
        )


class FakeAnthropic:
    def __init__(self, text="feat: add greeting helper", error=None):
        self.messages = FakeMessages(text=text, error=error)


@pytest.fixture
def fake_anthropic():
    return FakeAnthropic


class FakeClient:
    """Stands in for ClaudeClient in CLI flow tests."""

    def __init__(self, api_key, model=None, message="feat: add greeting helper", error=None):
        self.api_key = api_key
        self.model = model or "claude-haiku-4-5-20251001"
        self.message = message
        self.error = error
        self.diffs = []

    @property
    def name(self):
        return f"Claude ({self.model})"

    def generate(self, diff):
        self.diffs.append(diff)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.message, model=self.model, tokens_used=48)

    def validate(self):
        if self.error is not None:
            raise self.error


class FakeRepo:
    """Stands in for GitRepository in CLI flow tests."""

    def __init__(self, staged="", unstaged="", files=None, commit_error=None):
        from gy.git import StagedChanges
        self.changes = StagedChanges(files=files or [], diff=staged)
        self.unstaged = unstaged
        self.commit_error = commit_error
        self.commits = []

    def get_staged_changes(self):
        return self.changes

    def get_unstaged_diff(self):
        return self.unstaged

    def commit(self, message):
        if self.commit_error is not None:
            raise self.commit_error
        self.commits.append(message)


@pytest.fixture
def fake_client_cls():
    return FakeClient


@pytest.fixture
def fake_repo_cls():
    return FakeRepo


def _git(*args, cwd):
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """A fresh repository with one commit, used as the working directory."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    _git("init", "-q", cwd=repo)
    _git("config", "user.email", "dev@example.com", cwd=repo)
    _git("config", "user.name", "Dev", cwd=repo)
    _git("config", "commit.gpgsign", "false", cwd=repo)
    (repo / "README.md").write_text("# demo\n")
    _git("add", "README.md", cwd=repo)
    _git("commit", "-q", "-m", "chore: initial commit", cwd=repo)
    monkeypatch.chdir(repo)
    return repo
