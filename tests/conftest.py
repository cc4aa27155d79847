import io
import json
import os
import sys
import urllib.error
import urllib.request
from datetime import datetime, timezone

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gitwrapped.github_client import GitHubClient
from gitwrapped.images import _read_card_art

API = "https://api.github.com"
NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_user(login="octocat", created_at="2019-03-10T08:00:00Z", **fields):
    data = {
        "login": login,
        "avatar_url": f"https://avatars.githubusercontent.com/u/1?login={login}",
        "created_at": created_at,
        "name": "The Octocat",
        "bio": "Building things",
        "location": "San Francisco",
        "public_repos": 3,
        "followers": 10,
        "following": 2,
    }
    data.update(fields)
    return data


def make_repo(id, name, language="Python", stars=0, fork=False,
              created_at="2020-01-01T00:00:00Z", pushed_at="2026-05-01T00:00:00Z", **fields):
    data = {
        "id": id,
        "name": name,
        "full_name": f"octocat/{name}",
        "description": f"{name} description",
        "html_url": f"https://github.com/octocat/{name}",
        "language": language,
        "stargazers_count": stars,
        "forks_count": 0,
        "size": 300,
        "created_at": created_at,
        "updated_at": pushed_at,
        "pushed_at": pushed_at,
        "fork": fork,
        "topics": [],
    }
    data.update(fields)
    return data


class FakeResponse:
    def __init__(self, body, status=200, content_type="application/json"):
        self._body = body
        self.status = status
        self.headers = {"Content-Type": content_type}

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False

    def read(self, amt=None):
        return self._body if amt is None else self._body[:amt]


class FakeGitHub:
    """Stand-in for ``urlopen`` answering from registered routes; everything else is a 404."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url, payload, status=200, content_type="application/json"):
        if url.startswith("/"):
            url = API + url
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        self.routes[url] = (status, body, content_type)

    def user(self, login="octocat", **fields):
        self.add(f"/users/{login}", make_user(login, **fields))

    def repos(self, login, repos, page=1):
        self.add(f"/users/{login}/repos?per_page=100&page={page}&sort=updated", repos)

    def languages(self, owner, repo, mapping, status=200):
        self.add(f"/repos/{owner}/{repo}/languages", mapping, status=status)

    def __call__(self, req, timeout=None):
        url = req.full_url if isinstance(req, urllib.request.Request) else req
        self.calls.append(url)
        status, body, content_type = self.routes.get(url, (404, b'{"message": "Not Found"}', "application/json"))
        if status >= 400:
            raise urllib.error.HTTPError(url, status, "error", {}, io.BytesIO(body))
        return FakeResponse(body, status, content_type)

    def paths(self):
        return [c[len(API):] for c in self.calls if c.startswith(API)]


@pytest.fixture
def github(monkeypatch):
    fake = FakeGitHub()
    monkeypatch.setattr(urllib.request, "urlopen", fake)
    return fake


@pytest.fixture
def client():
    return GitHubClient(token="", api_url=API, timeout=1)


@pytest.fixture
def octocat(github):
    """A user with two own repos and one fork, all with language data."""
    github.user("octocat")
    github.repos("octocat", [
        make_repo(1, "hello-world", language="Python", stars=42, size=800),
        make_repo(2, "spoon-knife", language="JavaScript", stars=3, pushed_at="2025-01-10T00:00:00Z"),
        make_repo(3, "forked-lib", language="Go", stars=900, fork=True),
    ])
    github.languages("octocat", "hello-world", {"Python": 6000, "HTML": 1000})
    github.languages("octocat", "spoon-knife", {"JavaScript": 3000})
    return github


@pytest.fixture(autouse=True)
def clear_card_art_cache():
    _read_card_art.cache_clear()
    yield
    _read_card_art.cache_clear()
