"""Tests for Repo creation and the commit driver"""
import os
import shutil

import git
import pytest

from vcs_torture.config import RepoOptions, WorktreeOptions
from vcs_torture.core.repo import Repo, delete_repo
from vcs_torture.models.repo import CommandResult
from vcs_torture.services.command_runner import CommandRunner

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
requires_hg = pytest.mark.skipif(shutil.which("hg") is None, reason="hg is not installed")
requires_svn = pytest.mark.skipif(
    shutil.which("svn") is None or shutil.which("svnadmin") is None,
    reason="svn is not installed",
)


def _record(seen, stop_when=None):
    """A callback that records progress snapshots."""

    def callback(progress):
        seen.append((progress.done, progress.commit, progress.num_index_files))
        return bool(stop_when and stop_when(progress))

    return callback


class TestRepoInit:
    """Test Repo construction."""

    def test_paths(self, temp_dir):
        repo = Repo(str(temp_dir), "r", "git")
        assert repo.repo_path == temp_dir / "r"
        assert repo.server_url is None
        assert repo.max_command_line > 0

    def test_svn_server_url(self, temp_dir):
        repo = Repo(str(temp_dir), "r", "svn")
        assert repo.server_url.endswith("r-svnrepo")


@requires_git
class TestRepoCreate:
    """Test creating and reopening real git repositories."""

    def test_create_fresh(self, temp_dir):
        repo = Repo(str(temp_dir), "r", "git")
        assert repo.create() is True
        assert (temp_dir / "r" / ".git").is_dir()

        config = git.Repo(temp_dir / "r").config_reader()
        assert config.get_value("gc", "auto") == 0

    def test_create_existing(self, temp_dir):
        assert Repo(str(temp_dir), "r", "git").create() is True

        again = Repo(str(temp_dir), "r", "git")
        assert again.create() is True
        assert again.num_head_files == 0
        assert again.num_commits_done == 0

    def test_create_in_existing_worktree(self, temp_dir, small_worktree_options):
        repo = Repo(str(temp_dir), "r", "git")
        repo.add_worktree(small_worktree_options).generate()

        assert repo.create() is True
        assert (temp_dir / "r" / ".git").is_dir()

    def test_create_without_dest(self, temp_dir):
        repo = Repo(str(temp_dir / "missing"), "r", "git")
        assert repo.create() is False


class TestRepoCreateUnsupported:
    """Test systems that can't inspect existing repositories."""

    @pytest.mark.parametrize("vcs,metadata", [("hg", ".hg"), ("svn", ".svn")])
    def test_existing_repository(self, temp_dir, vcs, metadata):
        (temp_dir / "r" / metadata).mkdir(parents=True)
        assert Repo(str(temp_dir), "r", vcs).create() is False


class TestRepoCommit:
    """Test the add/commit loop against a mock backend."""

    def test_two_commits_of_three_files(self, make_mock_repo, mock_backend):
        repo = make_mock_repo(num_files=6, num_commits=2, adds_per_commit=1, files_per_add=3)
        files = repo.worktree.files
        seen = []

        assert repo.commit(_record(seen)) is True

        assert [c.args[0] for c in mock_backend.add.call_args_list] == [files[0:3], files[3:6]]
        assert [c.args[0] for c in mock_backend.commit.call_args_list] == ["commit 1", "commit 2"]
        assert repo.num_commits_done == 2
        assert repo.num_index_files == 6
        # add, commit, add, commit, done
        assert seen == [
            (False, 1, 3),
            (False, 1, 3),
            (False, 2, 6),
            (False, 2, 6),
            (True, 2, 6),
        ]

    def test_several_adds_per_commit(self, make_mock_repo, mock_backend):
        repo = make_mock_repo(num_files=12, num_commits=2, adds_per_commit=3, files_per_add=2)
        assert repo.commit() is True
        assert mock_backend.add.call_count == 6
        assert mock_backend.commit.call_count == 2
        assert all(len(c.args[0]) == 2 for c in mock_backend.add.call_args_list)

    def test_stop_during_adds_skips_commit(self, make_mock_repo, mock_backend):
        repo = make_mock_repo(num_files=6, num_commits=2, files_per_add=3)
        seen = []

        assert repo.commit(_record(seen, stop_when=lambda p: True)) is False

        assert mock_backend.add.call_count == 1
        mock_backend.commit.assert_not_called()
        assert repo.num_commits_done == 0
        assert seen[-1][0] is True

    def test_stop_after_first_commit(self, make_mock_repo, mock_backend):
        repo = make_mock_repo(num_files=6, num_commits=2, files_per_add=3)
        seen = []

        def stop_when(progress):
            return repo.num_commits_done == 1

        assert repo.commit(_record(seen, stop_when)) is False
        assert mock_backend.commit.call_count == 1
        assert mock_backend.add.call_count == 1
        assert repo.num_commits_done == 1

    def test_runs_out_of_files(self, make_mock_repo, mock_backend):
        repo = make_mock_repo(num_files=4, num_commits=3, files_per_add=3)

        assert repo.commit() is True

        assert [len(c.args[0]) for c in mock_backend.add.call_args_list] == [3, 1]
        assert mock_backend.commit.call_count == 2
        assert repo.num_commits_done == 2

    def test_skips_files_at_head(self, make_mock_repo, mock_backend):
        repo = make_mock_repo(num_files=6, num_commits=1, files_per_add=3)
        repo.num_head_files = 3
        repo.num_commits_done = 4

        repo.commit()

        assert mock_backend.add.call_args.args[0] == repo.worktree.files[3:6]
        mock_backend.commit.assert_called_once_with("commit 5")

    def test_overhead_is_subtracted(self, make_mock_repo):
        repo = make_mock_repo(num_files=6, num_commits=2, files_per_add=3)
        repo.overhead = 0.2

        repo.commit()

        assert repo.add_time == pytest.approx(2 * 0.3)
        assert repo.commit_time == pytest.approx(2 * 0.8)

    def test_overhead_per_add_command(self, make_mock_repo):
        repo = make_mock_repo(num_files=6, num_commits=1, files_per_add=6)
        repo.batcher.max_command_line = 12
        repo.overhead = 0.1

        repo.commit()

        invocations = repo.batcher.total_invocations
        assert invocations > 1
        assert repo.add_time == pytest.approx(invocations * 0.4)

    def test_object_stats(self, make_mock_repo, mock_backend):
        repo = make_mock_repo(num_files=6, num_commits=2, files_per_add=3)
        repo.object_stats = True
        mock_backend.count_objects.return_value = (7, 2)
        loose = []

        def callback(progress):
            loose.append(progress.loose_objects)
            return False

        repo.commit(callback)

        assert mock_backend.count_objects.call_count == 2
        assert loose[-1] == 7
        assert repo.pack_objects == 2

    def test_no_object_stats_by_default(self, make_mock_repo, mock_backend):
        repo = make_mock_repo()
        repo.commit()
        mock_backend.count_objects.assert_not_called()

    def test_calibrate_overhead(self, make_mock_repo, mock_backend):
        repo = make_mock_repo()
        mock_backend.version.side_effect = [
            CommandResult(elapsed=0.3),
            CommandResult(elapsed=0.1),
            CommandResult(elapsed=0.2),
        ]
        assert repo.calibrate_overhead() == pytest.approx(0.1)
        assert repo.overhead == pytest.approx(0.1)


@requires_git
class TestRepoCommitGit:
    """Test full add/commit cycles with git."""

    def test_commit_cycles(self, temp_dir):
        repo = Repo(
            str(temp_dir), "r", "git",
            RepoOptions(num_commits=2, adds_per_commit=1, files_per_add=3),
            runner=CommandRunner(),
        )
        assert repo.create() is True
        worktree = repo.add_worktree(
            WorktreeOptions(num_files=6, files_per_dir=2, dirs_per_dir=2, file_size=64)
        )
        assert worktree.generate() is True
        seen = []

        assert repo.commit(_record(seen)) is True

        assert max(s[2] for s in seen) == 6
        git_repo = git.Repo(temp_dir / "r")
        assert len(git_repo.git.log("--oneline").splitlines()) == 2
        assert len(git_repo.git.ls_tree("-r", "HEAD").splitlines()) == 6
        assert git_repo.head.commit.message.strip() == "commit 2"

        reopened = Repo(str(temp_dir), "r", "git")
        assert reopened.create() is True
        assert reopened.num_head_files == 6
        assert reopened.num_commits_done == 2

    def test_calibrate_with_git(self, temp_dir):
        repo = Repo(str(temp_dir), "r", "git")
        repo.create()
        assert repo.calibrate_overhead(samples=2) > 0


def _commit_six_files(temp_dir, vcs, runner):
    """Two commits of three files each; the last two files land in a/a/."""
    repo = Repo(
        str(temp_dir), "r", vcs,
        RepoOptions(num_commits=2, adds_per_commit=1, files_per_add=3),
        runner=runner,
    )
    assert repo.create() is True
    worktree = repo.add_worktree(
        WorktreeOptions(num_files=6, files_per_dir=2, dirs_per_dir=1, file_size=64)
    )
    assert worktree.generate() is True
    assert any(path.count("/") >= 2 for path in worktree.files)
    seen = []

    assert repo.commit(_record(seen)) is True
    assert max(s[2] for s in seen) == 6
    assert repo.num_commits_done == 2
    return repo


@requires_hg
class TestRepoCommitHg:
    """Test full add/commit cycles with Mercurial."""

    def test_commit_cycles(self, temp_dir, runner):
        repo = _commit_six_files(temp_dir, "hg", runner)
        repo_path = str(repo.repo_path)

        log = runner.run("hg", ["log", "--template", "{desc}|{author}\\n"], repo_path).stdout
        assert log.splitlines() == ["commit 2|vcs-torture", "commit 1|vcs-torture"]
        files = runner.run("hg", ["files", "-r", "tip"], repo_path).stdout
        assert len(files.splitlines()) == 6

        assert Repo(str(temp_dir), "r", "hg").create() is False


@requires_svn
class TestRepoCommitSvn:
    """Test full add/commit cycles with Subversion."""

    def test_commit_cycles(self, temp_dir, runner):
        repo = _commit_six_files(temp_dir, "svn", runner)
        assert (temp_dir / "r-svnrepo").is_dir()
        assert (temp_dir / "r" / ".svn").is_dir()

        log = runner.run("svn", ["log", repo.server_url], str(temp_dir)).stdout
        messages = [line for line in log.splitlines() if line.startswith("commit ")]
        assert messages == ["commit 2", "commit 1"]
        listing = runner.run("svn", ["list", "-R", repo.server_url], str(temp_dir)).stdout
        assert len([p for p in listing.splitlines() if not p.endswith("/")]) == 6

        assert delete_repo(str(temp_dir), "r", "svn") is True
        assert os.listdir(temp_dir) == []


class TestDeleteRepo:
    """Test removing repositories."""

    def test_delete(self, temp_dir):
        (temp_dir / "r" / "a").mkdir(parents=True)
        (temp_dir / "r" / "a" / "at").write_text("x")
        assert delete_repo(str(temp_dir), "r", "git") is True
        assert not (temp_dir / "r").exists()

    def test_delete_missing(self, temp_dir):
        assert delete_repo(str(temp_dir), "r", "git") is True

    def test_delete_svn_server(self, temp_dir):
        (temp_dir / "r").mkdir()
        (temp_dir / "r-svnrepo").mkdir()
        assert delete_repo(str(temp_dir), "r", "svn") is True
        assert os.listdir(temp_dir) == []
