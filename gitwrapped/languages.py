"""Language byte aggregation across repositories."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .models import LanguageStats

# GitHub's linguist language colors
LANGUAGE_COLORS = {
    "JavaScript": "#f1e05a", "TypeScript": "#3178c6", "Python": "#3572A5",
    "Rust": "#dea584", "Go": "#00ADD8", "Java": "#b07219", "C++": "#f34b7d",
    "C": "#555555", "C#": "#178600", "Ruby": "#701516", "Swift": "#ffac45",
    "Kotlin": "#A97BFF", "HTML": "#e34c26", "CSS": "#563d7c", "SCSS": "#c6538c",
    "Vue": "#42b883", "PHP": "#4F5D95", "Shell": "#89e051", "Dart": "#00B4AB",
    "Lua": "#000080", "Dockerfile": "#384d54", "Makefile": "#427819", "R": "#198CE7",
    "Scala": "#c22d40", "Haskell": "#5e5086", "Elixir": "#6e4a7e", "Clojure": "#db5855",
    "Objective-C": "#438eff", "Perl": "#0298c3", "HCL": "#844FBA",
    "Jupyter Notebook": "#DA5B0B",
}
DEFAULT_COLOR = "#6b7280"

MARKUP_LANGUAGES = frozenset({"HTML", "CSS", "Markdown", "SCSS", "Less"})

# Notebook bytes are mostly JSON, markdown and cell output.
RECLASSIFY = {"Jupyter Notebook": "Python"}

# Languages under 0.5% of the total are dropped (1 / 200).
MIN_SHARE_DIVISOR = 200


def get_language_color(language: str) -> str:
    return LANGUAGE_COLORS.get(language, DEFAULT_COLOR)


def is_markup(language: str) -> bool:
    return language in MARKUP_LANGUAGES


def aggregate_bytes(byte_maps: Iterable[Dict[str, int]]) -> Dict[str, int]:
    """Sum byte counts per language, crediting reclassified languages to their target."""
    totals: Dict[str, int] = {}
    for repo_langs in byte_maps:
        for lang, count in repo_langs.items():
            lang = RECLASSIFY.get(lang, lang)
            totals[lang] = totals.get(lang, 0) + max(int(count), 0)
    return totals


def calculate_language_stats(byte_maps: Iterable[Dict[str, int]]) -> List[LanguageStats]:
    """Merge per-repo byte maps into a sorted, thresholded distribution.

    Percentages are rounded half-up to one decimal place using integer
    tenths. When rounding pushes the kept entries above 100.0, the entries
    that were rounded up furthest give back a tenth each. Ties in byte
    count keep first-seen order.
    """
    totals = aggregate_bytes(byte_maps)
    total = sum(totals.values())
    if total == 0:
        return []

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    kept = [(lang, count) for lang, count in ranked if count * MIN_SHARE_DIVISOR >= total]
    tenths = [(count * 2000 + total) // (2 * total) for _, count in kept]

    overshoot = sum(tenths) - 1000
    if overshoot > 0:
        rounded_up = sorted(
            range(len(kept)), key=lambda i: tenths[i] * total - kept[i][1] * 1000, reverse=True
        )
        for i in rounded_up[:overshoot]:
            tenths[i] -= 1

    return [
        LanguageStats(
            language=lang,
            bytes=count,
            percentage=share / 10,
            color=get_language_color(lang),
            is_markup=is_markup(lang),
        )
        for (lang, count), share in zip(kept, tenths)
    ]


def programming_languages(stats: Iterable[LanguageStats]) -> List[LanguageStats]:
    return [s for s in stats if not s.is_markup]


def top_language(stats: List[LanguageStats]) -> Optional[str]:
    """First non-markup language; else the first entry; ``None`` when empty."""
    for s in stats:
        if not s.is_markup:
            return s.language
    return stats[0].language if stats else None


def least_used_language(stats: List[LanguageStats]) -> str:
    code = programming_languages(stats)
    return code[-1].language if code else "None"


def language_diversity(stats: Iterable[LanguageStats]) -> str:
    count = len(programming_languages(stats))
    if count >= 8:
        return "polyglot"
    if count >= 5:
        return "versatile"
    if count >= 3:
        return "multi-language"
    if count == 2:
        return "bilingual"
    return "focused"
