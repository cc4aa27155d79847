# badge.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Optional, Sequence

from .github_base import svg_text
from .models import Repository
from .stats import own_repositories, utcnow

DEFAULT_VARIANT = "compact"
DEFAULT_BADGE_THEME = "light"

BADGE_WIDTH, BADGE_HEIGHT = 320, 80
MINIMAL_WIDTH, MINIMAL_HEIGHT = 200, 58
ERROR_WIDTH, ERROR_HEIGHT = 200, 40

FONT = "Inter, -apple-system, BlinkMacSystemFont, sans-serif"
MONO = "'JetBrains Mono', monospace"
LINK_LIMIT = 24


@dataclass(frozen=True)
class BadgeColors:
    bg: str
    border: str
    text: str
    text_muted: str
    accent: str
    accent_start: str
    accent_end: str
    link_icon: str


BADGE_THEMES = MappingProxyType({
    "light": BadgeColors("#ffffff", "#e2e8f0", "#1e293b", "#64748b", "#3b82f6", "#3b82f6", "#2563eb", "#3b82f6"),
    "dark": BadgeColors("#0d1117", "#30363d", "#e6edf3", "#8b949e", "#58a6ff", "#58a6ff", "#3b82f6", "#58a6ff"),
    "mono": BadgeColors("#ffffff", "#e5e7eb", "#111827", "#6b7280", "#111827", "#374151", "#111827", "#6b7280"),
})


@dataclass(frozen=True)
class BadgeData:
    username: str
    repos: int
    language_count: int
    active_year: int
    portfolio: str = ""
    linkedin: str = ""


def build_badge_data(
    username: str,
    repos: Sequence[Repository],
    portfolio: str = "",
    linkedin: str = "",
    now: Optional[datetime] = None,
) -> BadgeData:
    """Counts own repos and the distinct primary languages among them."""
    own = own_repositories(repos)
    return BadgeData(
        username=username,
        repos=len(own),
        language_count=len({r.language for r in own if r.language}),
        active_year=(now or utcnow()).year,
        portfolio=portfolio,
        linkedin=linkedin,
    )


def get_badge_colors(theme: str) -> BadgeColors:
    return BADGE_THEMES.get(theme, BADGE_THEMES[DEFAULT_BADGE_THEME])


def _short(text: str, limit: int = LINK_LIMIT) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def _links_row(data: BadgeData, c: BadgeColors, x: int, y: int, size: int) -> str:
    parts = []
    if data.portfolio:
        parts.append(f'<tspan fill="{c.link_icon}">⬡</tspan> {svg_text(_short(data.portfolio))}')
    if data.linkedin:
        parts.append(f'<tspan fill="{c.link_icon}">in</tspan> {svg_text(_short(data.linkedin))}')
    if not parts:
        return ""
    return f'<text x="{x}" y="{y}" font-family="{FONT}" font-size="{size}" fill="{c.text_muted}">{" · ".join(parts)}</text>'


def _accent_defs(c: BadgeColors) -> str:
    return f"""<defs>
    <linearGradient id="accentBar" x1="0" y1="0" x2="0" y2="1">
      <stop offset="0%" stop-color="{c.accent_start}"/>
      <stop offset="100%" stop-color="{c.accent_end}"/>
    </linearGradient>
  </defs>"""


def render_compact_badge(data: BadgeData, theme: str = DEFAULT_BADGE_THEME) -> str:
    c = get_badge_colors(theme)
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{BADGE_WIDTH}" height="{BADGE_HEIGHT}" viewBox="0 0 {BADGE_WIDTH} {BADGE_HEIGHT}">
  {_accent_defs(c)}
  <rect x="0.5" y="0.5" width="{BADGE_WIDTH - 1}" height="{BADGE_HEIGHT - 1}" rx="8" fill="{c.bg}" stroke="{c.border}"/>
  <rect x="0.5" y="0.5" width="4" height="{BADGE_HEIGHT - 1}" rx="2" fill="url(#accentBar)"/>
  <text x="18" y="24" font-family="{FONT}" font-size="13" font-weight="700" fill="{c.accent}">GitWrapped</text>
  <text x="101" y="24" font-family="{FONT}" font-size="13" fill="{c.text_muted}">|</text>
  <text x="112" y="24" font-family="{FONT}" font-size="13" font-weight="600" fill="{c.text}">{svg_text(_short(data.username, 26))}</text>
  <text x="18" y="45" font-family="{FONT}" font-size="11" fill="{c.text_muted}">{data.repos} Repos · {data.language_count} Languages · Active {data.active_year}</text>
  {_links_row(data, c, 18, 66, 10)}
</svg>"""


def render_minimal_badge(data: BadgeData, theme: str = DEFAULT_BADGE_THEME) -> str:
    c = get_badge_colors(theme)
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{MINIMAL_WIDTH}" height="{MINIMAL_HEIGHT}" viewBox="0 0 {MINIMAL_WIDTH} {MINIMAL_HEIGHT}">
  <rect x="0.5" y="0.5" width="{MINIMAL_WIDTH - 1}" height="{MINIMAL_HEIGHT - 1}" rx="8" fill="{c.bg}" stroke="{c.border}"/>
  <rect x="0.5" y="0.5" width="3" height="{MINIMAL_HEIGHT - 1}" rx="2" fill="{c.accent}"/>
  <text x="14" y="24" font-family="{FONT}" font-size="13" font-weight="600" fill="{c.text}">{svg_text(_short(data.username))}</text>
  <text x="14" y="44" font-family="{FONT}" font-size="11" fill="{c.text_muted}">{data.repos} Repos · {data.language_count} Langs</text>
</svg>"""


def render_identity_badge(data: BadgeData, theme: str = DEFAULT_BADGE_THEME) -> str:
    c = get_badge_colors(theme)
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{BADGE_WIDTH}" height="{BADGE_HEIGHT}" viewBox="0 0 {BADGE_WIDTH} {BADGE_HEIGHT}">
  {_accent_defs(c)}
  <rect x="0.5" y="0.5" width="{BADGE_WIDTH - 1}" height="{BADGE_HEIGHT - 1}" rx="8" fill="{c.bg}" stroke="{c.border}"/>
  <rect x="0.5" y="0.5" width="4" height="{BADGE_HEIGHT - 1}" rx="2" fill="url(#accentBar)"/>
  <text x="14" y="26" font-family="{MONO}" font-size="13" font-weight="600" fill="{c.text}">{svg_text(_short(data.username, 30))}.dev</text>
  <text x="14" y="46" font-family="{FONT}" font-size="11" fill="{c.text_muted}">Developer Snapshot · GitWrapped</text>
  {_links_row(data, c, 14, 66, 10)}
</svg>"""


RENDERERS = MappingProxyType({
    "compact": render_compact_badge,
    "minimal": render_minimal_badge,
    "identity": render_identity_badge,
})


def render_badge(data: BadgeData, variant: str = DEFAULT_VARIANT, theme: str = DEFAULT_BADGE_THEME) -> str:
    """Unknown variants and themes fall back to the defaults."""
    return RENDERERS.get(variant, RENDERERS[DEFAULT_VARIANT])(data, theme)


def render_error_badge(not_found: bool = True) -> str:
    message = "User not found" if not_found else "Badge unavailable"
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{ERROR_WIDTH}" height="{ERROR_HEIGHT}" viewBox="0 0 {ERROR_WIDTH} {ERROR_HEIGHT}">
  <rect x="0.5" y="0.5" width="{ERROR_WIDTH - 1}" height="{ERROR_HEIGHT - 1}" rx="8" fill="#ffffff" stroke="#e5e7eb"/>
  <text x="12" y="25" font-family="{FONT}" font-size="12" fill="#9ca3af">{message}</text>
</svg>"""
