"""Sync pipeline: clone, regenerate proposal pages, publish."""

from sipdocs.sync.updater import (
    SyncError,
    SyncReport,
    Updater,
    clone_repo,
    cloned_repos,
    run_sync,
)

__all__ = [
    "SyncError",
    "SyncReport",
    "Updater",
    "clone_repo",
    "cloned_repos",
    "run_sync",
]
