"""Display and formatting service for run results"""
from typing import Optional

from rich.console import Console
from rich.table import Table

from vcs_torture.core.repo import Repo
from vcs_torture.logging_config import get_logger
from vcs_torture.services.command_runner import format_output
from vcs_torture.services.worktree import Worktree

console = Console()
logger = get_logger(__name__)


def _per(total: float, count: int) -> str:
    if count <= 0:
        return "-"
    return f"{total / count:.4f}"


class DisplayService:
    def __init__(self, verbose: bool = False, target: Optional[Console] = None):
        self.verbose = verbose
        self.console = target or console

    def display_worktree_summary(self, worktree: Worktree) -> None:
        """Show what generation produced."""
        table = Table(title=f"Worktree {worktree.root}")
        table.add_column("Files")
        table.add_column("Written")
        table.add_column("Directories")
        table.add_column("File size")
        table.add_row(
            str(len(worktree.files)),
            str(worktree.files_written),
            str(len(worktree.dirs)),
            str(worktree.options.file_size),
        )
        self.console.print(table)

    def display_repo_info(self, repo: Repo) -> None:
        self.console.print(
            f"{repo.vcs} repository {repo.repo_path}: "
            f"{repo.num_head_files} files at head, {repo.num_commits_done} commits"
        )

    def display_commit_summary(self, repo: Repo, commits_this_run: int) -> None:
        """Show timing totals for a commit run."""
        table = Table(title=f"{repo.vcs} {repo.repo_path}")
        table.add_column("Commits")
        table.add_column("Index files")
        table.add_column("Add (s)")
        table.add_column("Add/commit (s)")
        table.add_column("Commit (s)")
        table.add_column("Commit/commit (s)")
        table.add_column("Overhead (s)")
        table.add_row(
            str(repo.num_commits_done),
            str(repo.num_index_files),
            f"{repo.add_time:.4f}",
            _per(repo.add_time, commits_this_run),
            f"{repo.commit_time:.4f}",
            _per(repo.commit_time, commits_this_run),
            f"{repo.overhead:.4f}",
        )
        self.console.print(table)

        if repo.object_stats:
            self.console.print(
                f"Objects: {repo.loose_objects} loose, {repo.pack_objects} packed"
            )

    def display_command_output(self, stdout: str, stderr: str) -> None:
        """Echo captured output of a failed command."""
        for line in format_output(stdout, stderr):
            self.console.print(line, markup=False, highlight=False)
