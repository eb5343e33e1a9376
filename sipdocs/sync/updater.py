"""
Mirror proposal state into the documentation site repository.

Proposals take different forms depending on their status:
- "under review" and earlier proposals are open PRs
- "rejected" and "withdrawn" proposals are closed PRs
- "waiting for implementation" and later proposals are Markdown files in
  the content directory of the proposals repository

Every proposal becomes one `.md` file in the docs repository's output
directory, which is regenerated from scratch on each run.
"""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from sipdocs import git
from sipdocs.lib.config import SyncConfig
from sipdocs.lib.github import GitHubClient, GitHubError
from sipdocs.proposals.classify import decode_pull_request
from sipdocs.proposals.frontmatter import proposal_filename, render_document

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """A step of the sync failed; the run is aborted."""


@dataclass
class SyncReport:
    """What one run did."""
    merged_copied: int = 0
    pull_requests_written: int = 0
    skipped: list[int] = field(default_factory=list)  # PR numbers
    changed: bool = False
    pushed: bool = False


def mask_token(text: str, token: str) -> str:
    """Hide the token in command output before it reaches logs or errors."""
    return text.replace(token, "***") if token else text


def _check(result: git.GitResult, action: str, token: str = "") -> None:
    if not result.success:
        stderr = mask_token(result.stderr.strip(), token)
        raise SyncError(f"{action} failed: {stderr}")


def clone_repo(repo: str, dest: Path, config: SyncConfig) -> Path:
    """Clone `repo` at the configured branch and set the bot identity."""
    logger.info(f"Cloning {repo}")
    url = git.authenticated_url(repo, config.token)
    _check(git.clone(url, config.base_branch, dest), f"Cloning {repo}", config.token)
    _check(
        git.configure_identity(dest, config.git_user_name, config.git_user_email),
        f"Configuring git identity in {repo}",
    )
    return dest


@contextmanager
def cloned_repos(config: SyncConfig) -> Iterator[tuple[Path, Path]]:
    """Clone both repositories into a temporary directory.

    The directory is removed on exit, whether or not the run succeeded.
    """
    with tempfile.TemporaryDirectory(prefix="sipdocs-") as tmp:
        root = Path(tmp)
        sips_repo = clone_repo(config.sips_repo, root / "sips", config)
        docs_repo = clone_repo(config.docs_repo, root / "docs", config)
        yield sips_repo, docs_repo


class Updater:
    """
    Regenerate the docs repository's proposal pages.

    Args:
        sips_repo: Local clone of the proposals repository
        docs_repo: Local clone of the documentation site repository
        github: Client for the proposals repository's pull requests
        config: Sync settings
        push: When False, stop after staging and report whether anything changed
    """

    def __init__(
        self,
        sips_repo: Path,
        docs_repo: Path,
        github: GitHubClient,
        config: SyncConfig,
        push: bool = True,
    ):
        self.sips_repo = sips_repo
        self.docs_repo = docs_repo
        self.github = github
        self.config = config
        self.push = push
        self.output_path = docs_repo / config.output_dir
        self.report = SyncReport()

    def update(self) -> SyncReport:
        self.clean()
        self.update_merged_proposals()
        self.update_proposal_pull_requests()
        self.push_changes()
        return self.report

    def clean(self) -> None:
        """Remove current content in the output directory."""
        try:
            if self.output_path.exists():
                shutil.rmtree(self.output_path)
            self.output_path.mkdir(parents=True)
        except OSError as e:
            raise SyncError(f"Cannot reset {self.output_path}: {e}") from None

    def update_merged_proposals(self) -> None:
        """Copy merged proposals, the `.md` files under the content directory."""
        logger.info("Updating merged SIPs")
        content_dir = self.sips_repo / self.config.content_dir
        if not content_dir.is_dir():
            raise SyncError(f"Content directory not found: {content_dir}")
        try:
            for sip in sorted(content_dir.rglob("*.md")):
                if sip.is_file():
                    shutil.copyfile(sip, self.output_path / sip.name)
                    self.report.merged_copied += 1
        except OSError as e:
            raise SyncError(f"Copying merged SIPs failed: {e}") from None

    def update_proposal_pull_requests(self) -> None:
        """Write a frontmatter-only page for every decodable unmerged PR."""
        logger.info("Updating unmerged pull request SIPs")
        try:
            issues = self.github.list_unmerged_pull_requests(
                self.config.sips_owner,
                self.config.sips_name,
                self.config.base_branch,
            )
        except GitHubError as e:
            raise SyncError(mask_token(str(e), self.config.token)) from None

        for issue in issues:
            state = decode_pull_request(issue)
            if state is None:
                self.report.skipped.append(issue.number)
                continue
            try:
                filename = proposal_filename(issue.title)
            except ValueError as e:
                logger.warning(f"Ignoring pull request #{issue.number}. {e}")
                self.report.skipped.append(issue.number)
                continue

            target = self.output_path / filename
            if target.exists():
                logger.warning(f"Pull request #{issue.number} overwrites {filename}")
            try:
                target.write_text(
                    render_document(issue.title, issue.number, state), encoding="utf-8"
                )
            except (OSError, UnicodeError) as e:
                raise SyncError(f"Writing {target} failed: {e}") from None
            self.report.pull_requests_written += 1

    def push_changes(self) -> None:
        """Commit and push the output directory if it changed."""
        _check(git.stage_files(self.docs_repo, [self.config.output_dir]), "git add")

        diff = git.diff_cached_quiet(self.docs_repo)
        if diff.returncode not in (0, 1):
            raise SyncError(f"git diff failed: {diff.stderr.strip()}")
        if diff.returncode == 0:
            logger.info("No changes to push.")
            return

        self.report.changed = True
        if not self.push:
            changed = git.get_staged_names(self.docs_repo)
            logger.info(f"{len(changed)} file(s) changed; not pushing (--no-push)")
            return

        _check(git.commit(self.docs_repo, self.config.commit_message), "git commit")
        # The push fails if someone else pushed in the middle of the run;
        # the next scheduled run picks the changes up again.
        _check(git.push(self.docs_repo), "git push", self.config.token)
        self.report.pushed = True
        logger.info("Pushed updated SIPs")


def run_sync(config: SyncConfig, push: bool = True) -> SyncReport:
    """Clone both repositories, regenerate the proposal pages and publish."""
    github = GitHubClient(config.token)
    with cloned_repos(config) as (sips_repo, docs_repo):
        return Updater(sips_repo, docs_repo, github, config, push=push).update()
