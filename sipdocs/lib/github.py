"""
GitHub REST access for the proposals repository.

Provides utilities for interacting with GitHub via the gh CLI. Every call
goes through `gh api --include` so response headers (pagination links) are
available alongside the JSON body.
"""

import json
import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

logger = logging.getLogger(__name__)


# Timeout for GitHub CLI operations (seconds)
GH_TIMEOUT_SECONDS = 30

# Largest page size the REST API accepts
PER_PAGE = 100


class GitHubError(Exception):
    """A GitHub API call failed."""


@dataclass
class ApiResponse:
    """Status, headers and decoded JSON body of one API call."""
    status: int
    headers: dict[str, str]
    body: Any

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower())


@dataclass
class PullRequest:
    """The fields of a pull request listing that the sync needs."""
    number: int
    title: str
    merged_at: str | None = None

    @property
    def merged(self) -> bool:
        return self.merged_at is not None


@dataclass
class Issue:
    """An issue (or the issue side of a pull request) with its labels."""
    number: int
    title: str
    labels: list[str] = field(default_factory=list)


def check_gh_available() -> tuple[bool, str]:
    """Check gh CLI is installed.

    Authentication is not checked: the token is supplied per call.

    Returns: (ok, error_message)
    """
    try:
        result = subprocess.run(
            ["gh", "--version"],
            capture_output=True,
            timeout=5,
        )
        if result.returncode != 0:
            return False, "GitHub CLI (gh) not installed\n  Install: https://cli.github.com/"
        return True, ""

    except FileNotFoundError:
        return False, "GitHub CLI (gh) not found\n  Install: https://cli.github.com/"
    except subprocess.TimeoutExpired:
        return False, "GitHub CLI timed out"


def has_next_page(link_header: str | None) -> bool:
    """Check whether a `Link` response header advertises a next page."""
    if not link_header:
        return False
    return any(link.strip().endswith('rel="next"') for link in link_header.split(","))


def parse_include_output(output: str) -> ApiResponse:
    """
    Split `gh api --include` output into status, headers and body.

    The output is an HTTP status line, header lines, a blank line, then
    the body.
    """
    # JSON bodies never contain raw CR/LF, so normalising is safe
    text = output.replace("\r\n", "\n")
    head, _, body_text = text.partition("\n\n")
    lines = head.splitlines()
    if not lines or not lines[0].startswith("HTTP/"):
        raise GitHubError("Unexpected response from gh: missing status line")

    try:
        status = int(lines[0].split()[1])
    except (IndexError, ValueError):
        raise GitHubError(f"Unexpected status line from gh: {lines[0]}") from None

    headers = {}
    for line in lines[1:]:
        name, sep, value = line.partition(":")
        if sep:
            headers[name.strip().lower()] = value.strip()

    try:
        body = json.loads(body_text) if body_text.strip() else None
    except json.JSONDecodeError:
        raise GitHubError("Invalid JSON from gh") from None

    return ApiResponse(status=status, headers=headers, body=body)


class GitHubClient:
    """Minimal REST client backed by `gh api`.

    The token is passed explicitly and handed to gh as GH_TOKEN for each
    call, so no ambient gh login is required.
    """

    def __init__(self, token: str, timeout: int = GH_TIMEOUT_SECONDS):
        self._token = token
        self.timeout = timeout

    def api_get(self, endpoint: str, params: dict | None = None) -> ApiResponse:
        """GET a REST endpoint (e.g. "repos/scala/improvement-proposals/pulls").

        Raises:
            GitHubError: on a non-zero gh exit, timeout or undecodable output
        """
        if params:
            endpoint = f"{endpoint}?{urlencode(params)}"

        env = dict(os.environ)
        env["GH_TOKEN"] = self._token

        try:
            result = subprocess.run(
                ["gh", "api", "--include",
                 "-H", "Accept: application/vnd.github+json",
                 endpoint],
                capture_output=True,
                text=True,
                env=env,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise GitHubError(f"GitHub API timeout: GET {endpoint}") from None
        except FileNotFoundError:
            raise GitHubError("GitHub CLI (gh) not found") from None

        if result.returncode != 0:
            raise GitHubError(f"GET {endpoint} failed: {result.stderr.strip()}")

        return parse_include_output(result.stdout)

    def fetch_all_pages(self, endpoint: str, params: dict | None = None) -> list:
        """Collect a paginated listing, page by page, while a next page exists."""
        items = []
        page = 1
        while True:
            query = dict(params or {})
            query.update({"per_page": PER_PAGE, "page": page})
            response = self.api_get(endpoint, query)
            if not isinstance(response.body, list):
                raise GitHubError(f"Expected a list from {endpoint}, page {page}")
            items.extend(response.body)
            if not has_next_page(response.header("Link")):
                return items
            page += 1

    def list_pull_requests(
        self, owner: str, repo: str, base: str, state: str = "all"
    ) -> list[PullRequest]:
        """List pull requests against `base` in the given state."""
        raw = self.fetch_all_pages(
            f"repos/{owner}/{repo}/pulls",
            {"state": state, "base": base},
        )
        return [
            PullRequest(
                number=pr["number"],
                title=pr.get("title", ""),
                merged_at=pr.get("merged_at"),
            )
            for pr in raw
        ]

    def get_issue(self, owner: str, repo: str, number: int) -> Issue:
        """Fetch an issue with its full label set."""
        data = self.api_get(f"repos/{owner}/{repo}/issues/{number}").body
        if not isinstance(data, dict):
            raise GitHubError(f"Expected an object for issue #{number}")
        return Issue(
            number=data["number"],
            title=data.get("title", ""),
            labels=[label["name"] for label in data.get("labels", [])],
        )

    def list_unmerged_pull_requests(self, owner: str, repo: str, base: str) -> list[Issue]:
        """
        Fetch open and closed-but-unmerged pull requests as issues.

        Merged pull requests are skipped: their proposal already lives as a
        Markdown file in the repository.
        """
        pulls = self.list_pull_requests(owner, repo, base)
        unmerged = [pr for pr in pulls if not pr.merged]
        logger.debug(f"{len(unmerged)} of {len(pulls)} pull requests are unmerged")
        return [self.get_issue(owner, repo, pr.number) for pr in unmerged]
