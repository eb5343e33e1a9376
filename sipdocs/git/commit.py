"""Git commit operations."""

from pathlib import Path

from sipdocs.git.runner import run_git, GitResult


def configure_identity(repo: Path, name: str, email: str) -> GitResult:
    """Set the committer identity for this clone only."""
    result = run_git(["config", "user.name", name], repo)
    if not result.success:
        return result
    return run_git(["config", "user.email", email], repo)


def stage_files(worktree: Path, files: list[str]) -> GitResult:
    """Stage specific files or directories (additions, changes and removals)."""
    return run_git(["add", "-A", "--"] + files, worktree)


def commit(worktree: Path, message: str) -> GitResult:
    """Create a commit with the given message."""
    return run_git(["commit", "-m", message], worktree)
