"""
Configuration loader for sync runs.

Settings come from an optional env file, overridden by the process
environment. The result is an explicit SyncConfig handed to the driver;
nothing else reads the environment after startup.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from . import envparse

logger = logging.getLogger(__name__)

TOKEN_KEY = "IMPROVEMENT_BOT_TOKEN"

DEFAULTS = {
    "SIPS_REPO": "scala/improvement-proposals",
    "DOCS_REPO": "scala/docs.scala-lang",
    "BASE_BRANCH": "main",
    "OUTPUT_DIR": "_sips/sips",
    "CONTENT_DIR": "content",
    "COMMIT_MESSAGE": "Update SIPs state",
    "GIT_USER_NAME": "Scala Improvement Bot",
    "GIT_USER_EMAIL": "scala.improvement@epfl.ch",
}

REPO_SLUG_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$')


class ConfigError(Exception):
    """Sync configuration is missing or invalid."""


@dataclass(frozen=True)
class SyncConfig:
    """Settings for one sync run."""
    token: str
    sips_repo: str  # owner/name of the proposals repository
    docs_repo: str  # owner/name of the documentation site repository
    base_branch: str
    output_dir: str  # Relative to the docs clone, e.g. "_sips/sips"
    content_dir: str  # Relative to the proposals clone, where merged SIPs live
    commit_message: str
    git_user_name: str
    git_user_email: str

    @property
    def sips_owner(self) -> str:
        return self.sips_repo.split("/", 1)[0]

    @property
    def sips_name(self) -> str:
        return self.sips_repo.split("/", 1)[1]

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return (
            f"SyncConfig(sips_repo={self.sips_repo!r}, docs_repo={self.docs_repo!r}, "
            f"base_branch={self.base_branch!r}, output_dir={self.output_dir!r})"
        )


def load_sync_config(
    env_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> SyncConfig:
    """Load SyncConfig from an env file and the environment.

    Raises:
        ConfigError: if the token is missing, a repo slug is malformed, or
            the env file cannot be parsed
    """
    if environ is None:
        environ = os.environ

    values = dict(DEFAULTS)
    if env_file is not None:
        try:
            values.update(envparse.load_env(env_file))
        except (FileNotFoundError, ValueError) as e:
            raise ConfigError(str(e)) from None
        logger.debug(f"Loaded settings from {env_file}")

    for key in [TOKEN_KEY, *DEFAULTS]:
        if environ.get(key):
            values[key] = environ[key]

    token = values.get(TOKEN_KEY, "")
    if not token:
        raise ConfigError(f"{TOKEN_KEY} is not set")

    for key in ("SIPS_REPO", "DOCS_REPO"):
        if not REPO_SLUG_PATTERN.match(values[key]):
            raise ConfigError(f"{key} must look like 'owner/name', got '{values[key]}'")

    for key in ("OUTPUT_DIR", "CONTENT_DIR"):
        if Path(values[key]).is_absolute() or ".." in Path(values[key]).parts:
            raise ConfigError(f"{key} must be a relative path inside the repository")

    return SyncConfig(
        token=token,
        sips_repo=values["SIPS_REPO"],
        docs_repo=values["DOCS_REPO"],
        base_branch=values["BASE_BRANCH"],
        output_dir=values["OUTPUT_DIR"],
        content_dir=values["CONTENT_DIR"],
        commit_message=values["COMMIT_MESSAGE"],
        git_user_name=values["GIT_USER_NAME"],
        git_user_email=values["GIT_USER_EMAIL"],
    )
