"""Derivation of UserStats from a user snapshot, its repos and language stats."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from . import config
from .github_client import GitHubClient
from .insights import detect_devops_maturity, developer_dna, experience_profile
from .languages import calculate_language_stats, language_diversity, top_language
from .models import GitHubUser, LanguageStats, Repository, UserStats

logger = logging.getLogger(__name__)

POPULAR_REPO_STARS = 50
TOP_REPOSITORIES = 6


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def account_age(created_at: datetime, now: datetime) -> Tuple[int, int]:
    """Whole years and remaining months, by calendar month (day of month ignored)."""
    months = (now.year * 12 + now.month) - (created_at.year * 12 + created_at.month)
    months = max(months, 0)
    return months // 12, months % 12


def own_repositories(repos: Sequence[Repository]) -> List[Repository]:
    return [r for r in repos if not r.fork]


def most_recently_pushed(repos: Sequence[Repository], limit: int) -> List[Repository]:
    return sorted(repos, key=lambda r: r.last_pushed, reverse=True)[:limit]


def by_stars(repos: Sequence[Repository]) -> List[Repository]:
    return sorted(repos, key=lambda r: r.stargazers_count, reverse=True)


def is_recently_active(repos: Sequence[Repository], now: datetime, days: int = config.RECENT_ACTIVITY_DAYS) -> bool:
    cutoff = now - timedelta(days=days)
    return any(r.pushed_at is not None and r.pushed_at >= cutoff for r in repos)


def repos_by_year(repos: Sequence[Repository]) -> Dict[int, int]:
    counts: Dict[int, int] = {}
    for repo in repos:
        counts[repo.created_at.year] = counts.get(repo.created_at.year, 0) + 1
    return counts


def most_active_year(counts: Dict[int, int]) -> Optional[int]:
    # Strictly greater: the first year seen keeps a tie.
    best_year, best_count = None, 0
    for year, count in counts.items():
        if count > best_count:
            best_year, best_count = year, count
    return best_year


def derive_stats(
    user: GitHubUser,
    repos: Sequence[Repository],
    language_stats: List[LanguageStats],
    byte_maps: Sequence[Dict[str, int]] = (),
    analyzed_repos: Sequence[Repository] = (),
    now: Optional[datetime] = None,
) -> UserStats:
    """Compute every derived field; pure over already-fetched data.

    ``byte_maps`` are the raw language maps of ``analyzed_repos`` (same
    order) and feed only the notebook and DevOps insights.
    """
    now = now or utcnow()
    own = own_repositories(repos)
    ranked = by_stars(own)
    most_starred = ranked[0] if ranked else None

    years, months = account_age(user.created_at, now)
    year_counts = repos_by_year(repos)
    top = top_language(language_stats)
    top_pct = next((s.percentage for s in language_stats if s.language == top), 0.0)
    diversity = language_diversity(language_stats)
    has_popular = most_starred is not None and most_starred.stargazers_count >= POPULAR_REPO_STARS

    return UserStats(
        user=user,
        repositories=list(repos),
        language_stats=list(language_stats),
        total_stars=sum(r.stargazers_count for r in repos),
        total_forks=sum(r.forks_count for r in repos),
        public_repo_count=user.public_repos,
        own_repo_count=len(own),
        forked_repo_count=len(repos) - len(own),
        starred_by_others=sum(r.stargazers_count for r in own),
        top_repositories=ranked[:TOP_REPOSITORIES],
        account_age_years=years,
        account_age_months=months,
        recently_active=is_recently_active(repos, now),
        most_active_year=most_active_year(year_counts),
        repos_by_year=year_counts,
        top_language=top,
        top_language_percentage=top_pct,
        language_diversity=diversity,
        has_popular_repo=has_popular,
        most_starred_repo=most_starred,
        developer_dna=developer_dna(byte_maps),
        devops_maturity=detect_devops_maturity(analyzed_repos, byte_maps),
        experience_profile=experience_profile(years, has_popular, diversity),
    )


def fetch_user_stats(username: str, client: Optional[GitHubClient] = None, now: Optional[datetime] = None) -> UserStats:
    """Full-fidelity pipeline: user + all repo pages + languages of the 20 latest own repos."""
    client = client or GitHubClient()
    user, repos = client.fetch_user_and_repos(username)
    analyzed = most_recently_pushed(own_repositories(repos), config.MAX_ANALYZED_REPOS)
    byte_maps = client.fetch_languages_for(user.login, analyzed)
    logger.debug("Analyzed %d of %d repos for %s", len(analyzed), len(repos), username)
    return derive_stats(user, repos, calculate_language_stats(byte_maps), byte_maps, analyzed, now)
