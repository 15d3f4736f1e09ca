"""Pytest fixtures for vcs-torture tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from vcs_torture.config import RepoOptions, WorktreeOptions
from vcs_torture.core.repo import Repo
from vcs_torture.models.repo import CommandResult, RepoInfo
from vcs_torture.services.batcher import CommandBatcher
from vcs_torture.services.command_runner import CommandRunner
from vcs_torture.services.vcs import VcsBackend


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def small_worktree_options():
    """Five small files, two per directory, two directories per directory."""
    return WorktreeOptions(num_files=5, files_per_dir=2, dirs_per_dir=2, file_size=20)


@pytest.fixture
def runner():
    """A real command runner."""
    return CommandRunner()


@pytest.fixture
def mock_runner():
    """A command runner that never starts a process."""
    runner = Mock(spec=CommandRunner)
    runner.run = Mock(return_value=CommandResult(elapsed=0.01))
    return runner


@pytest.fixture
def mock_backend(temp_dir):
    """A backend whose commands take a fixed, known time."""
    backend = Mock(spec=VcsBackend)
    backend.name = "git"
    backend.repo_path = temp_dir / "repo"
    backend.server_url = None
    backend.add = Mock(return_value=CommandResult(elapsed=0.5))
    backend.commit = Mock(return_value=CommandResult(elapsed=1.0))
    backend.version = Mock(return_value=CommandResult(elapsed=0.0))
    backend.inspect = Mock(return_value=RepoInfo())
    backend.count_objects = Mock(return_value=(0, 0))
    backend.is_repository = Mock(return_value=True)
    return backend


@pytest.fixture
def make_mock_repo(temp_dir, mock_backend):
    """Build a Repo wired to mock_backend with a generated worktree."""

    def _make(num_files=6, num_commits=2, adds_per_commit=1, files_per_add=3):
        repo = Repo(
            str(temp_dir),
            "repo",
            "git",
            RepoOptions(
                num_commits=num_commits,
                adds_per_commit=adds_per_commit,
                files_per_add=files_per_add,
            ),
        )
        repo.backend = mock_backend
        repo.batcher = CommandBatcher(mock_backend, repo.max_command_line)
        worktree = repo.add_worktree(
            WorktreeOptions(num_files=num_files, files_per_dir=4, dirs_per_dir=4, file_size=32)
        )
        assert worktree.generate()
        return repo

    return _make
