import pytest

from conftest import NOW, make_repo, make_user
from gitwrapped.card_data import (
    BASIC,
    DEFAULT_BIO,
    PLACEHOLDER_REPO,
    STAGE_1,
    STAGE_2,
    activity_consistency,
    build_card_data,
    compute_code_velocity,
    compute_hp,
    compute_retreat_cost,
    compute_xp,
    evolution_stage,
    fetch_card_data,
    generate_ability,
    truncate,
)
from gitwrapped.languages import calculate_language_stats
from gitwrapped.models import GitHubUser, Repository
from gitwrapped.stats import derive_stats


def repo(id, **kw):
    return Repository.from_api(make_repo(id, f"repo-{id}", **kw))


def card_for(repos, languages=None, **user_fields):
    user = GitHubUser.from_api(make_user(**user_fields))
    stats = derive_stats(user, repos, calculate_language_stats(languages or []), now=NOW)
    return build_card_data(stats, now=NOW)


@pytest.mark.parametrize("age, stage", [(0, BASIC), (1, BASIC), (2, STAGE_1), (4, STAGE_1), (5, STAGE_2), (12, STAGE_2)])
def test_evolution_stage_boundaries(age, stage):
    assert evolution_stage(age) == stage


def test_account_created_five_years_ago_today_is_stage_two():
    card = card_for([], created_at="2021-06-15T12:00:00Z")
    assert card.account_age_years == 5
    assert card.evolution_stage == STAGE_2


@pytest.mark.parametrize("count", [0, 1, 5])
def test_always_two_top_repos(count):
    repos = [repo(i, stars=i) for i in range(1, count + 1)]
    card = card_for(repos, [{"Rust": 100}])
    assert len(card.top_repos) == 2
    if count == 0:
        assert [r.name for r in card.top_repos] == [PLACEHOLDER_REPO, PLACEHOLDER_REPO]
        assert all(r.stars == 0 and r.language == "Rust" for r in card.top_repos)
    if count == 5:
        assert [r.stars for r in card.top_repos] == [5, 4]


def test_top_repos_ignore_forks():
    card = card_for([repo(1, stars=1), repo(2, stars=999, fork=True)])
    assert card.top_repos[0].name == "repo-1"
    assert card.top_repos[1].name == PLACEHOLDER_REPO


def test_text_fields_truncated_with_ellipsis():
    long_desc = "x" * 80
    card = card_for(
        [repo(1, description=long_desc)],
        bio="b" * 150,
        location="Llanfairpwllgwyngyll",
    )
    assert card.top_repos[0].description.endswith("...")
    assert len(card.top_repos[0].description) == 45
    assert len(card.bio) == 100 and card.bio.endswith("...")
    assert len(card.location) == 15 and card.location.endswith("...")


def test_empty_bio_and_location():
    card = card_for([], bio=None, location=None)
    assert card.bio == DEFAULT_BIO
    assert card.location == ""


def test_truncate_leaves_short_text_alone():
    assert truncate("short", 10) == "short"
    assert truncate(None, 10) == ""


def test_zero_star_count_capped():
    card = card_for([repo(i) for i in range(1, 9)])
    assert card.zero_star_repo_count == 4


def test_least_used_and_counts():
    card = card_for([repo(1)], [{"Python": 9000, "Go": 900, "HTML": 100}])
    assert card.top_language == "Python"
    assert card.least_used_language == "Go"
    assert card.programming_language_count == 2


def test_no_languages_uses_fallback():
    card = card_for([])
    assert card.top_language == "Polyglot"
    assert card.least_used_language == "None"


def test_numeric_fields_clamped():
    assert compute_hp(0, 0, 0) == 100
    assert compute_hp(1.0, 10_000, 30) == 340
    assert compute_xp(0, 0, 0, 0) == 10
    assert compute_xp(50, 5000, 100_000, 30) == 9999
    repos = [repo(1, stars=10_000)]
    card = card_for(repos)
    assert card.attack2.damage == 200
    assert card.attack2.energy_cost == 3
    assert 10 <= card.attack1.damage <= 60


def test_code_velocity():
    recent = repo(1, pushed_at="2026-05-01T00:00:00Z")
    old = repo(2, pushed_at="2025-01-01T00:00:00Z")
    assert compute_code_velocity([recent, old], NOW) == 50
    assert compute_code_velocity([], NOW) == 0


def test_retreat_cost():
    assert compute_retreat_cost(2, [repo(1, size=1200)]) == 3
    assert compute_retreat_cost(2, [repo(1, size=50_000)]) == 4
    assert compute_retreat_cost(7, [repo(1, size=0)]) == 3
    assert compute_retreat_cost(0, []) == 0


def test_activity_consistency():
    repos = [
        repo(1, pushed_at="2026-01-05T00:00:00Z"),
        repo(2, pushed_at="2026-01-20T00:00:00Z"),
        repo(3, pushed_at="2026-04-01T00:00:00Z"),
    ]
    assert activity_consistency(repos) == (0.5, 4)
    assert activity_consistency([]) == (0.0, 1)


def test_ability_priority():
    assert generate_ability(6, 50, 500, 1.0).name == "Polyglot"
    assert generate_ability(1, 30, 0, 0).name == "Open Source Advocate"
    assert generate_ability(1, 1, 50, 0).name == "Star Collector"
    assert generate_ability(1, 1, 0, 0.7).name == "Streak Runner"
    assert generate_ability(1, 10, 5, 0).name == "Lone Wolf"
    assert generate_ability(0, 0, 0, 0).name == "Fresh Spawn"


def test_deterministic_over_same_inputs():
    repos = [repo(1, stars=3), repo(2, stars=8)]
    assert card_for(repos, [{"Go": 50}]) == card_for(repos, [{"Go": 50}])


def test_card_to_dict_shape():
    data = card_for([repo(1)]).to_dict()
    for key in ("avatarUrl", "evolutionStage", "topRepos", "zeroStarRepoCount", "codeVelocity", "attack1", "weakness"):
        assert key in data
    assert data["attack1"]["energyCost"] in (1, 2)
    assert len(data["topRepos"]) == 2


def test_fetch_card_data_light_path(octocat, client):
    card = fetch_card_data("octocat", client=client, now=NOW)

    assert card.username == "octocat"
    assert card.top_language == "Python"
    assert card.top_repos[0].name == "hello-world"
    assert card.weakness.type == "Water"
    assert card.resistance.type == "Grass"
    assert all("page=2" not in p for p in octocat.paths())
