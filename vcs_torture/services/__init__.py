"""Services for vcs-torture.

- generators: deterministic file names and content
- sharder: directory placement
- worktree: worktree generation
- batcher: command line sized batches of paths
- command_runner: timed external commands
- vcs: per-system backends
- display_service: result summaries
"""
