# github_client.py

from __future__ import annotations

import json
import logging
import re
import urllib.error
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from . import config
from .exceptions import GitHubAPIError, InvalidUsernameError, UserNotFoundError
from .models import GitHubUser, Repository

logger = logging.getLogger(__name__)

GITHUB_USERNAME_RE = re.compile(r"^[a-z\d](?:[a-z\d]|-(?=[a-z\d])){0,38}$", re.IGNORECASE)


def validate_username(username: Optional[str]) -> str:
    """Return the username unchanged, or raise before any API call is made."""
    if not username or not GITHUB_USERNAME_RE.fullmatch(username):
        raise InvalidUsernameError(username)
    return username


class GitHubClient:
    """Read-only access to the three GitHub REST endpoints the cards need.

    Only the user lookup is fatal. Repo listing and language lookups fail
    soft so one bad repository cannot abort the whole card.
    """

    def __init__(self, token: Optional[str] = None, api_url: Optional[str] = None, timeout: Optional[float] = None):
        self.token = config.TOKEN if token is None else token
        self.api_url = (api_url or config.API_URL).rstrip("/")
        self.timeout = config.API_TIMEOUT if timeout is None else timeout
        self.headers = dict(config.HEADERS)
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    def _make_request(self, path: str):
        """Shared HTTP handler with Authentication."""
        url = f"{self.api_url}{path}"
        req = urllib.request.Request(url, headers=self.headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return json.load(resp)
        except urllib.error.HTTPError as e:
            raise GitHubAPIError(f"GitHub API error: {e.code} {e.reason} ({path})", status=e.code) from e
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise GitHubAPIError(f"GitHub API request failed: {e} ({path})") from e

    # --- Users ---
    def fetch_user(self, username: str) -> GitHubUser:
        try:
            data = self._make_request(f"/users/{username}")
        except GitHubAPIError as e:
            if e.status == 404:
                raise UserNotFoundError(username) from e
            raise
        return GitHubUser.from_api(data)

    # --- Repositories ---
    def fetch_repositories(self, username: str, max_pages: int = config.MAX_PAGES) -> List[Repository]:
        """Page through the user's repos, newest-updated first.

        Stops on a short page or after ``max_pages``. A failed page ends
        pagination and keeps what was already collected.
        """
        repos: List[Repository] = []
        page = 1
        while page <= max_pages:
            try:
                batch = self._make_request(
                    f"/users/{username}/repos?per_page={config.PER_PAGE}&page={page}&sort=updated"
                )
            except GitHubAPIError as e:
                logger.warning("Repository page %d for %s unavailable: %s", page, username, e)
                break
            if not isinstance(batch, list):
                logger.warning("Repository page %d for %s is not a list", page, username)
                break
            try:
                parsed = [Repository.from_api(r) for r in batch]
            except (TypeError, KeyError, ValueError, AttributeError) as e:
                logger.warning("Repository page %d for %s is malformed: %s", page, username, e)
                break
            repos.extend(parsed)
            if len(batch) < config.PER_PAGE:
                break
            page += 1
        return repos

    # --- Languages ---
    def fetch_repo_languages(self, owner: str, repo: str) -> dict:
        try:
            data = self._make_request(f"/repos/{owner}/{repo}/languages")
        except GitHubAPIError as e:
            logger.warning("Languages for %s/%s unavailable: %s", owner, repo, e)
            return {}
        if not isinstance(data, dict):
            return {}
        try:
            return {lang: int(count) for lang, count in data.items()}
        except (TypeError, ValueError) as e:
            logger.warning("Languages for %s/%s are malformed: %s", owner, repo, e)
            return {}

    def fetch_languages_for(self, owner: str, repos: Iterable[Repository]) -> List[dict]:
        """Fetch language maps concurrently; results keep the order of ``repos``."""
        names = [r.name for r in repos]
        if not names:
            return []
        with ThreadPoolExecutor(max_workers=min(config.MAX_WORKERS, len(names))) as executor:
            return list(executor.map(lambda name: self.fetch_repo_languages(owner, name), names))

    def fetch_user_and_repos(self, username: str, max_pages: int = config.MAX_PAGES):
        """Issue the user lookup and repo listing together; the user lookup stays fatal."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            user_future = executor.submit(self.fetch_user, username)
            repos_future = executor.submit(self.fetch_repositories, username, max_pages)
            user = user_future.result()
            return user, repos_future.result()
