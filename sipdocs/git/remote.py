"""Git remote operations."""

from pathlib import Path

from sipdocs.git.runner import run_git, GitResult, CLONE_TIMEOUT

GITHUB_HOST = "github.com"


def authenticated_url(repo: str, token: str) -> str:
    """Build an HTTPS clone URL for an `owner/name` slug using a token."""
    return f"https://x-access-token:{token}@{GITHUB_HOST}/{repo}"


def clone(url: str, branch: str, dest: Path) -> GitResult:
    """Clone a single branch of `url` into `dest`."""
    return run_git(
        ["clone", "--branch", branch, url, str(dest)],
        dest.parent,
        timeout=CLONE_TIMEOUT,
    )


def push(worktree: Path) -> GitResult:
    """Push the current branch to its upstream."""
    return run_git(["push"], worktree, timeout=60)
