"""Git diff operations."""

from pathlib import Path

from sipdocs.git.runner import run_git, GitResult


def diff_cached_quiet(worktree: Path) -> GitResult:
    """Run `git diff --cached --quiet`.

    Exit 0 = index matches HEAD, exit 1 = staged changes, anything else
    is a git failure.
    """
    return run_git(["diff", "--cached", "--quiet"], worktree)


def get_staged_names(worktree: Path) -> list[str]:
    """Get list of staged file names."""
    result = run_git(["diff", "--cached", "--name-only"], worktree)
    return [f.strip() for f in result.stdout.splitlines() if f.strip()]
