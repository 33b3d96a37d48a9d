"""Shared pytest fixtures for the test suite."""

import json
import subprocess
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from gh_release.classify import BumpKind
from gh_release.version import next_version


def write_manifest(directory: Path, version: str = "1.0.0", name: str | None = None, **extra: Any) -> Path:
    """Write a package.json into a directory, creating it if needed.

    This is a shared helper for building module layouts on disk
    used across multiple test modules.

    Args:
        directory: Directory receiving the manifest.
        version: Value of the 'version' field.
        name: Package name, defaults to the directory name.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    data = {"name": name or directory.name, "version": version, **extra}
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


def read_version(path: Path) -> str:
    """Read the 'version' field of a JSON manifest."""
    return json.loads(path.read_text(encoding="utf-8"))["version"]


def completed(cmd: list[str], returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    """Create a CompletedProcess as returned by subprocess.run."""
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def mock_github_api() -> MagicMock:
    """Create a mock GitHubAPI instance for unit tests."""
    mock_api = MagicMock()
    mock_api.resolve_ref.return_value = "abc123def456"
    mock_api.get_commit_message.return_value = "Merge pull request #1 from owner/develop\n\nRelease"
    return mock_api


@pytest.fixture
def mock_pygithub() -> Generator[dict[str, Any], None, None]:
    """Patch PyGithub for unit tests."""
    with patch("gh_release.github_api.Github") as mock_github:
        mock_repo = MagicMock()
        mock_github.return_value.get_repo.return_value = mock_repo
        yield {"github": mock_github, "repo": mock_repo}


@pytest.fixture
def mock_run() -> Generator[MagicMock, None, None]:
    """Patch subprocess.run as used by gh_release.shell."""
    with patch("gh_release.shell.subprocess.run") as run:
        run.side_effect = lambda cmd, **kwargs: completed(cmd)
        yield run


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Repository with a root module, two submodules and a plain directory."""
    write_manifest(tmp_path, "1.0.0", name="root")
    write_manifest(tmp_path / "api", "1.0.0")
    write_manifest(tmp_path / "web", "0.9.0")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "README.md").write_text("docs\n", encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def clean_release_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the runner's environment out of argument defaults."""
    for key in ("GITHUB_TOKEN", "CURRENT_REF", "INPUT_DEBUG"):
        monkeypatch.delenv(key, raising=False)


class FakeTools:
    """Stand-in for npm and git recording the commands it receives.

    'npm version <kind>' bumps the root package.json and
    'npm version <x.y.z>' sets a module version, like npm does.
    """

    def __init__(
        self,
        npm_returncode: int = 0,
        failing_modules: tuple[str, ...] = (),
        root_version: str | None = None,
    ) -> None:
        self.npm_returncode = npm_returncode
        self.failing_modules = failing_modules
        self.root_version = root_version
        self.commands: list[list[str]] = []
        self.cwds: list[Path] = []

    def __call__(self, cmd: list[str], cwd: str, **kwargs: Any) -> subprocess.CompletedProcess:
        self.commands.append(cmd)
        self.cwds.append(Path(cwd))
        if cmd[:2] != ["npm", "version"]:
            return completed(cmd)

        path = Path(cwd) / "package.json"
        data = json.loads(path.read_text(encoding="utf-8-sig"))
        if cmd[2] in ("minor", "patch"):
            if self.npm_returncode != 0:
                return completed(cmd, self.npm_returncode, stderr="npm ERR! Git working directory not clean.")
            data["version"] = self.root_version or next_version(data["version"], BumpKind(cmd[2]))
        else:
            if Path(cwd).name in self.failing_modules:
                return completed(cmd, 1, stderr="npm ERR! version script failed")
            data["version"] = cmd[2]
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return completed(cmd, stdout=f"v{data['version']}\n")


@pytest.fixture
def fake_tools(mock_run: MagicMock) -> FakeTools:
    """Route npm and git commands to a FakeTools instance."""
    tools = FakeTools()
    mock_run.side_effect = tools
    return tools
