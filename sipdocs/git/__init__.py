"""Git operations for sipdocs.

Thin wrappers over the git CLI used to clone, commit and publish the
documentation repository.

Return type conventions:
- Functions returning GitResult: Caller must check .success before using output.
  Examples: clone(), stage_files(), commit(), push()
- diff_cached_quiet() also returns GitResult; its returncode carries the answer
  (0 = clean index, 1 = staged changes, anything else = git failure).
- Functions returning parsed values: Return empty on failure.
  Examples: get_staged_names() -> []
"""

from sipdocs.git.runner import GitResult, run_git
from sipdocs.git.diff import (
    diff_cached_quiet,
    get_staged_names,
)
from sipdocs.git.commit import (
    configure_identity,
    stage_files,
    commit,
)
from sipdocs.git.remote import (
    authenticated_url,
    clone,
    push,
)

__all__ = [
    "GitResult",
    "run_git",
    # diff
    "diff_cached_quiet",
    "get_staged_names",
    # commit
    "configure_identity",
    "stage_files",
    "commit",
    # remote
    "authenticated_url",
    "clone",
    "push",
]
