"""Git command runner for unattended runs."""

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TIMEOUT = 30

# Cloning a docs site with its history can take a while
CLONE_TIMEOUT = 300

# Fail instead of waiting for credentials on a terminal nobody watches
NON_INTERACTIVE_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_ASKPASS": "true",
}


@dataclass
class GitResult:
    """Outcome of one git invocation."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out


def run_git(
    args: list[str],
    cwd: Path,
    timeout: int = DEFAULT_TIMEOUT,
) -> GitResult:
    """
    Run `git -C <cwd> <args>` without any interactive prompts.

    Args:
        args: Git command arguments (e.g., ["add", "-A", "--", "_sips/sips"])
        cwd: Directory git runs in
        timeout: Timeout in seconds

    Returns:
        GitResult; a timeout is reported with returncode -1 and timed_out set
    """
    env = dict(os.environ)
    env.update(NON_INTERACTIVE_ENV)
    try:
        completed = subprocess.run(
            ["git", "-C", str(cwd), *args],
            capture_output=True,
            text=True,
            env=env,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return GitResult(
            returncode=-1,
            stdout="",
            stderr=f"git {args[0]} timed out after {timeout}s",
            timed_out=True,
        )
    return GitResult(completed.returncode, completed.stdout, completed.stderr)
