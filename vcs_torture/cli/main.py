"""Command-line interface for vcs-torture"""

import sys
import time

from rich.console import Console

from vcs_torture.cli.args import parse_args
from vcs_torture.config import Config
from vcs_torture.core.repo import Repo, delete_repo
from vcs_torture.exceptions import CommandFailedError, VcsTortureError
from vcs_torture.logging_config import get_logger, setup_logging
from vcs_torture.models.progress import CommitProgress, WorktreeProgress
from vcs_torture.services.command_runner import CommandRunner, ExecutableResolver
from vcs_torture.services.display_service import DisplayService
from vcs_torture.services.worktree import Worktree
from vcs_torture.utils.signals import SignalCatcher
from vcs_torture.utils.status import PeriodicStatus, make_progress, shorten_path

console = Console()
logger = get_logger(__name__)


def build_config(parsed_args) -> Config:
    """Build a Config from parsed arguments.

    Subcommands only define the options they use; the rest keep their defaults.
    """
    values = vars(parsed_args).copy()
    if "no_calibrate" in values:
        values["calibrate"] = not values.pop("no_calibrate")
    return Config.from_dict(values)


class Operations:
    """Runs one CLI operation against a Config."""

    def __init__(self, config: Config, signals: SignalCatcher, start_time: float):
        self.config = config
        self.signals = signals
        self.runner = CommandRunner(ExecutableResolver(), config.verbose, start_time)
        self.display = DisplayService(verbose=config.verbose)

    def _make_repo(self) -> Repo:
        return Repo(
            self.config.dest,
            self.config.repo,
            self.config.vcs,
            self.config.repo_options,
            runner=self.runner,
            max_command_line=self.config.max_command_line,
            object_stats=self.config.object_stats,
        )

    def run(self) -> int:
        handlers = {
            "create": self.create,
            "remove": self.remove,
            "worktree": self.worktree,
            "commit": self.commit,
        }
        return handlers[self.config.op]()

    def create(self) -> int:
        self.config.require("dest", "repo", "vcs")
        repo = self._make_repo()
        if not repo.create():
            console.print("[red]Couldn't create repo[/red]")
            return 1
        self.display.display_repo_info(repo)
        return 0

    def remove(self) -> int:
        self.config.require("dest", "repo", "vcs")
        if not delete_repo(self.config.dest, self.config.repo, self.config.vcs):
            console.print("[red]Couldn't remove repo[/red]")
            return 1
        return 0

    def _generate(self, worktree: Worktree) -> bool:
        status = PeriodicStatus()
        with make_progress() as progress:
            task = progress.add_task("create", total=worktree.options.num_files, detail="")

            def on_progress(cb: WorktreeProgress) -> bool:
                if self.signals.abort:
                    return True
                if not cb.done and not status.ready():
                    return False
                progress.update(task, completed=cb.position, detail=shorten_path(cb.path))
                progress.refresh()
                status.mark()
                return False

            return worktree.generate(on_progress)

    def worktree(self) -> int:
        self.config.require("dest", "repo")
        worktree = Worktree(self.config.dest, self.config.repo, self.config.worktree)
        if not self._generate(worktree):
            console.print("[red]Couldn't put files in worktree[/red]")
            return 1
        if self.config.verbose:
            self.display.display_worktree_summary(worktree)
        return 0

    def commit(self) -> int:
        self.config.require("dest", "repo", "vcs")
        repo = self._make_repo()
        if not repo.create():
            console.print("[red]Couldn't create repo[/red]")
            return 1

        worktree = repo.add_worktree(self.config.worktree)
        if not self._generate(worktree):
            console.print("[red]Couldn't put files in worktree[/red]")
            return 1

        if self.config.calibrate:
            repo.calibrate_overhead()

        commits_before = repo.num_commits_done
        status = PeriodicStatus()
        with make_progress() as progress:
            task = progress.add_task(
                "commit", total=self.config.repo_options.num_commits, detail=""
            )

            def on_progress(cb: CommitProgress) -> bool:
                if self.signals.abort:
                    return True
                if not cb.done and not status.ready():
                    return False
                completed = repo.num_commits_done - commits_before
                progress.update(task, completed=completed, detail=f"{cb.num_index_files} files")
                progress.refresh()
                status.mark()
                return False

            finished = repo.commit(on_progress)

        self.display.display_commit_summary(repo, repo.num_commits_done - commits_before)
        if not finished:
            console.print(
                f"[yellow]Stopped after {repo.num_commits_done - commits_before} commits[/yellow]"
            )
            return 1
        return 0


def main(argv=None) -> int:
    """Main entry point for the application."""
    start_time = time.perf_counter()
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    signals = SignalCatcher()
    try:
        config = build_config(parsed_args)

        if config.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        with signals:
            return Operations(config, signals, start_time).run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except CommandFailedError as e:
        console.print(f"[red]Error: {e}[/red]")
        DisplayService().display_command_output(e.stdout, e.stderr)
        return 1
    except VcsTortureError as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
