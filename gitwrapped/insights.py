"""Secondary profile insights: DevOps signals, notebook share, experience tier."""

from __future__ import annotations

from typing import Dict, List, Sequence

from .models import DeveloperDNA, DevOpsMaturity, DevOpsSignal, ExperienceProfile, Repository

NOTEBOOK_LANGUAGE = "Jupyter Notebook"

# (type, label, icon, weight, topics, languages)
DEVOPS_SIGNALS = (
    ("github-actions", "GitHub Actions", "\U0001F501", 30,
     {"github-actions", "ci", "cicd", "continuous-integration"}, set()),
    ("docker", "Docker", "\U0001F433", 25, {"docker"}, {"Dockerfile"}),
    ("kubernetes", "Kubernetes", "☸️", 20, {"kubernetes", "k8s", "helm"}, set()),
    ("terraform", "Terraform", "\U0001F3D7️", 15, {"terraform"}, {"HCL"}),
    ("shell", "Shell Automation", "\U0001F41A", 10, set(), {"Shell"}),
)

DEVOPS_TIERS = (
    (75, "infrastructure-architect"),
    (50, "pipeline-builder"),
    (25, "devops-curious"),
    (0, "code-shipper"),
)

LAB_ARCHETYPES = (
    (10, "production-focused"),
    (30, "hybrid"),
    (60, "research-oriented"),
)

EXPERIENCE_TIERS = (
    (10, "pioneer", "A decade of shipping code in public. The ecosystem grew up alongside you."),
    (6, "veteran", "Years of repositories behind you, and plenty of range still ahead."),
    (3, "established", "A solid body of work that keeps compounding."),
    (1, "rising", "Momentum is building. Keep pushing."),
    (0, "newcomer", "Every long streak starts with a first commit."),
)


def detect_devops_maturity(repos: Sequence[Repository], byte_maps: Sequence[Dict[str, int]]) -> DevOpsMaturity:
    """Look for CI/container/infra markers in repo topics and raw language maps.

    ``byte_maps`` is aligned with ``repos``; repos without a map
    contribute only their topics.
    """
    signals: List[DevOpsSignal] = []
    score = 0
    for signal_type, label, icon, weight, topics, languages in DEVOPS_SIGNALS:
        repo_count = 0
        for i, repo in enumerate(repos):
            langs = byte_maps[i] if i < len(byte_maps) else {}
            if topics.intersection(repo.topics) or languages.intersection(langs):
                repo_count += 1
        found = repo_count > 0
        if found:
            score += weight
        signals.append(DevOpsSignal(type=signal_type, label=label, icon=icon, found=found, repo_count=repo_count))

    score = min(score, 100)
    tier = next(name for floor, name in DEVOPS_TIERS if score >= floor)
    found_types = {s.type for s in signals if s.found}
    return DevOpsMaturity(
        score=score,
        tier=tier,
        signals=signals,
        has_github_actions="github-actions" in found_types,
        has_docker="docker" in found_types,
        has_kubernetes="kubernetes" in found_types,
        has_terraform="terraform" in found_types,
    )


def developer_dna(byte_maps: Sequence[Dict[str, int]]) -> DeveloperDNA:
    """Split raw (pre-reclassification) bytes into notebook and code strands."""
    notebook_bytes = sum(m.get(NOTEBOOK_LANGUAGE, 0) for m in byte_maps)
    notebook_repos = sum(1 for m in byte_maps if m.get(NOTEBOOK_LANGUAGE, 0) > 0)
    code_bytes = sum(count for m in byte_maps for lang, count in m.items() if lang != NOTEBOOK_LANGUAGE)
    analyzed = len(byte_maps)
    lab_ratio = round(notebook_repos * 100 / analyzed) if analyzed else 0

    archetype = "lab-scientist"
    for ceiling, name in LAB_ARCHETYPES:
        if lab_ratio < ceiling:
            archetype = name
            break

    return DeveloperDNA(
        notebook_bytes=notebook_bytes,
        notebook_repo_count=notebook_repos,
        lab_ratio=lab_ratio,
        lab_archetype=archetype,
        total_code_bytes=code_bytes,
    )


def experience_profile(account_age_years: int, has_popular_repo: bool, language_diversity: str) -> ExperienceProfile:
    tier, closing = next((name, msg) for floor, name, msg in EXPERIENCE_TIERS if account_age_years >= floor)

    contextual = None
    if has_popular_repo:
        contextual = "People are starring your work. That audience is worth building on."
    elif language_diversity == "polyglot":
        contextual = "Eight or more languages in rotation. Few developers cover that much ground."

    return ExperienceProfile(tier=tier, closing_message=closing, contextual_message=contextual)
