"""Command-line argument parsing for vcs-torture."""

import argparse

from vcs_torture.__version__ import __version__
from vcs_torture.constants import MAX_COMMAND_LINE, SUPPORTED_VCS


def _add_repo_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--vcs", choices=SUPPORTED_VCS, help="Version control system to test")
    parser.add_argument("--dest", help="Working area that holds the repository")
    parser.add_argument("--repo", help="Repository name inside --dest")


def _add_worktree_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--worktree-file-count", dest="num_files", type=int, default=1000,
        help="Number of files to generate (default: 1000)",
    )
    parser.add_argument(
        "--worktree-file-size", dest="file_size", type=int, default=10000,
        help="Size of each file in bytes (default: 10000)",
    )
    parser.add_argument(
        "--files-per-dir", type=int, default=48, help="Files per directory (default: 48)"
    )
    parser.add_argument(
        "--dirs-per-dir", type=int, default=16,
        help="Subdirectories per directory, at most 26 (default: 16)",
    )


def _add_commit_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--commits", dest="num_commits", type=int, default=10,
        help="Number of commits to make (default: 10)",
    )
    parser.add_argument(
        "--adds-per-commit", type=int, default=1, help="Add commands per commit (default: 1)"
    )
    parser.add_argument(
        "--files-per-add", type=int, default=100, help="Files per add command (default: 100)"
    )
    parser.add_argument(
        "--max-cmdline", dest="max_command_line", type=int, default=MAX_COMMAND_LINE,
        help=f"Byte limit for paths on one command line (default: {MAX_COMMAND_LINE})",
    )
    parser.add_argument(
        "--no-calibrate", action="store_true",
        help="Don't measure and subtract command start-up overhead",
    )
    parser.add_argument(
        "--object-stats", action="store_true", help="Count git objects after each commit"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; @file arguments expand to one argument per line."""
    common = argparse.ArgumentParser(add_help=False)
    # SUPPRESS keeps a subcommand from resetting a flag given before it
    common.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS,
        help="Show verbose output",
    )
    common.add_argument(
        "--debug", action="store_true", default=argparse.SUPPRESS,
        help="Show debug information for troubleshooting",
    )

    parser = argparse.ArgumentParser(
        prog="vcs-torture",
        description="Version control system torture test",
        fromfile_prefix_chars="@",
        parents=[common],
    )
    parser.add_argument("--version", action="version", version=f"vcs-torture {__version__}")

    subparsers = parser.add_subparsers(dest="op", metavar="<op>")
    subparsers.required = True

    create = subparsers.add_parser(
        "create", parents=[common], help="Create a repository, or show an existing one"
    )
    _add_repo_arguments(create)

    remove = subparsers.add_parser(
        "remove", parents=[common], help="Remove a repository and its files"
    )
    _add_repo_arguments(remove)

    worktree = subparsers.add_parser(
        "worktree", parents=[common], help="Generate worktree files"
    )
    _add_repo_arguments(worktree)
    _add_worktree_arguments(worktree)

    commit = subparsers.add_parser(
        "commit", parents=[common], help="Generate files and commit them in batches"
    )
    _add_repo_arguments(commit)
    _add_worktree_arguments(commit)
    _add_commit_arguments(commit)

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    args.verbose = getattr(args, "verbose", False)
    args.debug = getattr(args, "debug", False)
    return args
