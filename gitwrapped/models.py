"""Value objects for GitHub data, derived statistics and card data.

Everything here is constructed per request and never mutated after
construction. ``to_dict`` produces the JSON shape consumed by clients:
raw GitHub entities keep the API field names, derived objects use
camelCase keys.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Optional

from dateutil.parser import isoparse


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub ISO-8601 timestamp; ``None`` stays ``None``."""
    if not value:
        return None
    return isoparse(value)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _json_value(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, datetime):
        return value.isoformat().replace("+00:00", "Z")
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _json_value(v) for k, v in value.items()}
    return value


class _ApiFields:
    """JSON projection that keeps the GitHub API field names."""

    def to_dict(self) -> dict:
        return {f.name: _json_value(getattr(self, f.name)) for f in fields(self)}


class _CamelFields:
    """JSON projection with camelCase keys."""

    def to_dict(self) -> dict:
        return {_camel(f.name): _json_value(getattr(self, f.name)) for f in fields(self)}


# ==========================================
# 1. RAW GITHUB ENTITIES
# ==========================================
@dataclass(frozen=True)
class GitHubUser(_ApiFields):
    login: str
    avatar_url: str
    created_at: datetime
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    company: Optional[str] = None
    blog: Optional[str] = None
    twitter_username: Optional[str] = None
    public_repos: int = 0
    public_gists: int = 0
    followers: int = 0
    following: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "GitHubUser":
        return cls(
            login=data["login"],
            avatar_url=data.get("avatar_url") or "",
            created_at=parse_timestamp(data["created_at"]),
            name=data.get("name"),
            bio=data.get("bio"),
            location=data.get("location"),
            company=data.get("company"),
            blog=data.get("blog"),
            twitter_username=data.get("twitter_username"),
            public_repos=data.get("public_repos") or 0,
            public_gists=data.get("public_gists") or 0,
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
        )


@dataclass(frozen=True)
class Repository(_ApiFields):
    id: int
    name: str
    created_at: datetime
    full_name: str = ""
    description: Optional[str] = None
    html_url: str = ""
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    size: int = 0
    updated_at: Optional[datetime] = None
    pushed_at: Optional[datetime] = None
    fork: bool = False
    topics: tuple = ()

    @classmethod
    def from_api(cls, data: dict) -> "Repository":
        return cls(
            id=data["id"],
            name=data["name"],
            created_at=parse_timestamp(data["created_at"]),
            full_name=data.get("full_name") or "",
            description=data.get("description"),
            html_url=data.get("html_url") or "",
            language=data.get("language"),
            stargazers_count=data.get("stargazers_count") or 0,
            forks_count=data.get("forks_count") or 0,
            size=data.get("size") or 0,
            updated_at=parse_timestamp(data.get("updated_at")),
            pushed_at=parse_timestamp(data.get("pushed_at")),
            fork=bool(data.get("fork")),
            topics=tuple(data.get("topics") or ()),
        )

    @property
    def last_pushed(self) -> datetime:
        return self.pushed_at or self.created_at


# ==========================================
# 2. DERIVED STATISTICS
# ==========================================
@dataclass(frozen=True)
class LanguageStats(_CamelFields):
    language: str
    bytes: int
    percentage: float
    color: str
    is_markup: bool = False


@dataclass(frozen=True)
class DevOpsSignal(_CamelFields):
    type: str
    label: str
    icon: str
    found: bool
    repo_count: int


@dataclass(frozen=True)
class DevOpsMaturity(_CamelFields):
    score: int
    tier: str
    signals: list
    has_github_actions: bool
    has_docker: bool
    has_kubernetes: bool
    has_terraform: bool


@dataclass(frozen=True)
class DeveloperDNA(_CamelFields):
    notebook_bytes: int
    notebook_repo_count: int
    lab_ratio: int
    lab_archetype: str
    total_code_bytes: int


@dataclass(frozen=True)
class ExperienceProfile(_CamelFields):
    tier: str
    closing_message: str
    contextual_message: Optional[str] = None


@dataclass(frozen=True)
class UserStats(_CamelFields):
    user: GitHubUser
    repositories: list
    language_stats: list

    total_stars: int
    total_forks: int
    public_repo_count: int
    own_repo_count: int
    forked_repo_count: int
    starred_by_others: int

    top_repositories: list
    account_age_years: int
    account_age_months: int

    recently_active: bool
    most_active_year: Optional[int]
    repos_by_year: dict

    top_language: Optional[str]
    top_language_percentage: float
    language_diversity: str

    has_popular_repo: bool
    most_starred_repo: Optional[Repository]

    developer_dna: DeveloperDNA
    devops_maturity: DevOpsMaturity
    experience_profile: ExperienceProfile


# ==========================================
# 3. CARD DATA
# ==========================================
@dataclass(frozen=True)
class Ability(_CamelFields):
    name: str
    description: str


@dataclass(frozen=True)
class Attack(_CamelFields):
    name: str
    description: str
    damage: int
    energy_cost: int


@dataclass(frozen=True)
class TypeMatchup(_CamelFields):
    type: str
    modifier: str


@dataclass(frozen=True)
class TopRepo(_CamelFields):
    name: str
    description: str
    stars: int
    language: str


@dataclass(frozen=True)
class PokemonCardData(_CamelFields):
    username: str
    name: str
    avatar_url: str
    bio: str
    location: str
    evolution_stage: str
    top_language: str
    least_used_language: str
    account_age_years: int
    top_repos: list
    zero_star_repo_count: int
    programming_language_count: int
    hp: int
    xp: int
    code_velocity: int
    retreat_cost: int
    ability: Ability
    attack1: Attack
    attack2: Attack
    weakness: TypeMatchup
    resistance: TypeMatchup
