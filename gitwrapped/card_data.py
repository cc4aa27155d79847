"""Projection of GitHub statistics onto trading card fields.

The numeric fields (HP, XP, velocity, retreat cost, damage) are flavor
formulas: deterministic over the same inputs and always clamped to the
ranges the card layout expects.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from . import config
from .github_client import GitHubClient
from .languages import calculate_language_stats, least_used_language, programming_languages, top_language
from .models import (
    Ability,
    Attack,
    GitHubUser,
    LanguageStats,
    PokemonCardData,
    Repository,
    TopRepo,
    UserStats,
)
from .stats import account_age, by_stars, most_recently_pushed, own_repositories, utcnow
from .themes import LanguageCardTheme, get_language_theme, get_resistance, get_weakness

BASIC, STAGE_1, STAGE_2 = "BASIC", "STAGE 1", "STAGE 2"

TOP_REPO_SLOTS = 2
PLACEHOLDER_REPO = "Side Project"
FALLBACK_LANGUAGE = "Polyglot"
DEFAULT_BIO = "A developer on GitHub."

BIO_LIMIT = 100
LOCATION_LIMIT = 15
DESCRIPTION_LIMIT = 45
ATTACK_NAME_LIMIT = 22
MAX_ZERO_STAR_REPOS = 4
MAX_RETREAT_COST = 4


def truncate(text: Optional[str], limit: int, suffix: str = "...") -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[: limit - len(suffix)].rstrip() + suffix


def clamp(value: float, low: int, high: int) -> int:
    return int(min(max(value, low), high))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def evolution_stage(age_years: int) -> str:
    if age_years >= 5:
        return STAGE_2
    if age_years >= 2:
        return STAGE_1
    return BASIC


# --- Stat formulas ---
def activity_consistency(repos: Sequence[Repository]) -> Tuple[float, int]:
    """Share of months between first and last push that saw a push, and that span in months."""
    pushes = sorted(r.last_pushed for r in repos)
    if not pushes:
        return 0.0, 1
    active = {(d.year, d.month) for d in pushes}
    first, last = pushes[0], pushes[-1]
    span = max(1, (last.year - first.year) * 12 + (last.month - first.month) + 1)
    return len(active) / span, span


def compute_hp(consistency: float, total_stars: int, age_years: int) -> int:
    return clamp(round_half_up(100 + consistency * 80 + total_stars * 2 + age_years * 10), 100, 340)


def compute_xp(age_years: int, repo_count: int, total_stars: int, language_count: int) -> int:
    return clamp(round_half_up(age_years * 15 + repo_count * 5 + total_stars * 2 + language_count * 10), 10, 9999)


def compute_code_velocity(repos: Sequence[Repository], now: datetime) -> int:
    """Percent of the given repos pushed within the velocity window."""
    if not repos:
        return 0
    cutoff = now - relativedelta(months=config.VELOCITY_WINDOW_MONTHS)
    active = sum(1 for r in repos if r.last_pushed >= cutoff)
    return clamp(round_half_up(active * 100 / len(repos)), 0, 100)


def compute_retreat_cost(language_count: int, repos: Sequence[Repository]) -> int:
    avg_size = sum(r.size for r in repos) / len(repos) if repos else 0
    if avg_size > 0:
        return min(math.ceil(avg_size / 500), MAX_RETREAT_COST)
    return min(math.ceil(language_count / 3), MAX_RETREAT_COST)


def generate_ability(language_count: int, repo_count: int, total_stars: int, consistency: float) -> Ability:
    if language_count >= 6:
        return Ability("Polyglot", f"Fluent in {language_count} languages \u2014 attacks deal 10 extra damage")
    if repo_count >= 30:
        return Ability("Open Source Advocate", f"Maintains {repo_count} public repos \u2014 heals 20 HP each turn")
    if total_stars >= 50:
        return Ability("Star Collector", f"{total_stars} stars across repos \u2014 immune to weakness")
    if consistency >= 0.7:
        return Ability("Streak Runner", "High coding consistency \u2014 can't be put to sleep")
    if repo_count >= 10 and total_stars < 20:
        return Ability("Lone Wolf", "Prefers solo projects \u2014 retreat cost reduced by 1")
    return Ability("Fresh Spawn", "New to the ecosystem \u2014 draws an extra card each turn")


# --- Top repos and attacks ---
def pad_top_repos(repos: List[TopRepo], language: str, slots: int = TOP_REPO_SLOTS) -> List[TopRepo]:
    """Return exactly ``slots`` entries, filling gaps with placeholder projects."""
    padded = list(repos[:slots])
    while len(padded) < slots:
        padded.append(TopRepo(name=PLACEHOLDER_REPO, description="", stars=0, language=language))
    return padded


def select_top_repos(own: Sequence[Repository], language: str) -> List[TopRepo]:
    picked = [
        TopRepo(
            name=repo.name,
            description=truncate(repo.description, DESCRIPTION_LIMIT),
            stars=repo.stargazers_count,
            language=repo.language or language,
        )
        for repo in by_stars(own)[:TOP_REPO_SLOTS]
    ]
    return pad_top_repos(picked, language)


def light_attack(repo: TopRepo, theme: LanguageCardTheme, avg_monthly_activity: float) -> Attack:
    damage = clamp(round_half_up(avg_monthly_activity * 3) + repo.stars, 10, 60)
    return Attack(
        name=truncate(repo.name, ATTACK_NAME_LIMIT),
        description=repo.description or theme.light.description,
        damage=damage,
        energy_cost=1 if damage < 30 else 2,
    )


def heavy_attack(repo: TopRepo, theme: LanguageCardTheme, total_stars: int) -> Attack:
    damage = clamp(round_half_up(repo.stars * 10 + total_stars), 40, 200)
    return Attack(
        name=truncate(repo.name, ATTACK_NAME_LIMIT),
        description=repo.description or theme.heavy.description,
        damage=damage,
        energy_cost=2 if damage < 80 else 3,
    )


# --- Assembly ---
def _assemble(
    user: GitHubUser,
    repos: Sequence[Repository],
    language_stats: List[LanguageStats],
    age_years: int,
    now: datetime,
) -> PokemonCardData:
    own = own_repositories(repos)
    code_langs = programming_languages(language_stats)
    language_count = len(code_langs)
    top = top_language(language_stats) or FALLBACK_LANGUAGE
    theme = get_language_theme(top)

    total_stars = sum(r.stargazers_count for r in repos)
    consistency, span_months = activity_consistency(repos)
    avg_monthly_activity = len(repos) / span_months if repos else 0.0

    top_repos = select_top_repos(own, top)

    return PokemonCardData(
        username=user.login,
        name=user.name or user.login,
        avatar_url=user.avatar_url,
        bio=truncate(user.bio, BIO_LIMIT) or DEFAULT_BIO,
        location=truncate(user.location, LOCATION_LIMIT),
        evolution_stage=evolution_stage(age_years),
        top_language=top,
        least_used_language=least_used_language(language_stats),
        account_age_years=age_years,
        top_repos=top_repos,
        zero_star_repo_count=min(sum(1 for r in own if r.stargazers_count == 0), MAX_ZERO_STAR_REPOS),
        programming_language_count=language_count,
        hp=compute_hp(consistency, total_stars, age_years),
        xp=compute_xp(age_years, len(own), total_stars, language_count),
        code_velocity=compute_code_velocity(most_recently_pushed(own, config.MAX_CARD_REPOS), now),
        retreat_cost=compute_retreat_cost(language_count, repos),
        ability=generate_ability(language_count, len(own), total_stars, consistency),
        attack1=light_attack(top_repos[0], theme, avg_monthly_activity),
        attack2=heavy_attack(top_repos[1], theme, total_stars),
        weakness=get_weakness(theme.type),
        resistance=get_resistance(theme.type),
    )


def build_card_data(stats: UserStats, now: Optional[datetime] = None) -> PokemonCardData:
    """Full-fidelity path: card fields from an already derived UserStats."""
    return _assemble(stats.user, stats.repositories, stats.language_stats, stats.account_age_years, now or utcnow())


def fetch_card_data(username: str, client: Optional[GitHubClient] = None, now: Optional[datetime] = None) -> PokemonCardData:
    """Low-latency path for image embeds.

    One repo page and the languages of the ten most recently pushed own
    repos; skips the dashboard-only insights entirely.
    """
    now = now or utcnow()
    client = client or GitHubClient()
    user, repos = client.fetch_user_and_repos(username, max_pages=1)
    recent = most_recently_pushed(own_repositories(repos), config.MAX_CARD_REPOS)
    language_stats = calculate_language_stats(client.fetch_languages_for(user.login, recent))
    years, _ = account_age(user.created_at, now)
    return _assemble(user, repos, language_stats, years, now)
