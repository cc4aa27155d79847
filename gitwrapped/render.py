"""Trading card SVG (350x490).

``render_card_svg`` is a single pass from fully resolved card data to a
document string. Variable-length text arrives pre-truncated from the card
builder; everything interpolated goes through ``svg_text``.
"""

from __future__ import annotations

import textwrap
from typing import List, Optional

from .github_base import escape_xml, svg_text
from .images import CardImages
from .models import Attack, PokemonCardData
from .themes import LanguageCardTheme

CARD_WIDTH = 350
CARD_HEIGHT = 490

SANS = "'Mona Sans', -apple-system, sans-serif"
MONO = "'JetBrains Mono', monospace"

MAX_ENERGY_ICONS = 14
MAX_RETREAT_ICONS = 4
USERNAME_LIMIT = 14
ABILITY_WRAP_AT = 50
ABILITY_LINE_LIMIT = 55
ABILITY_WRAP_OFFSET = 6
BIO_LINE_WIDTH = 64
BIO_LINES = 2

EVOLUTION_GRADIENTS = {
    "STAGE 2": ("#FFD700", "#FFA500"),
    "STAGE 1": ("#E8E8E8", "#B0B0B0"),
    "BASIC": ("#E6B87D", "#C4926E"),
}

HEX_POINTS = "175,75 210,95 210,135 175,155 140,135 140,95"


def badge_width(label: str, char_width: float = 7.5, padding: int = 12, minimum: int = 65) -> float:
    """Pill width grows with the label, never below ``minimum``."""
    return max(len(label) * char_width + padding, minimum)


def energy_count(cost: int, maximum: int = MAX_ENERGY_ICONS) -> int:
    return min(max(int(cost), 0), maximum)


def wrap_text(text: str, width: int, max_lines: int) -> List[str]:
    """Word-wrap into at most ``max_lines``; an overflowing last line ends in '...'."""
    lines = textwrap.wrap(text or "", width=width)
    if len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    kept[-1] = kept[-1][: width - 3].rstrip() + "..."
    return kept


def _truncate(text: str, limit: int, suffix: str = "...") -> str:
    return text if len(text) <= limit else text[: limit - len(suffix)] + suffix


def _energy_row(count: int, cy: float, fill: str, x0: int = 20, step: int = 22) -> str:
    return "\n    ".join(
        f'<circle cx="{x0 + i * step}" cy="{cy}" r="9" fill="url(#{fill})" stroke="rgba(255,255,255,0.3)" stroke-width="1"/>'
        for i in range(count)
    )


def _attack_block(attack: Attack, y: float) -> str:
    icons = energy_count(attack.energy_cost)
    text_x = 30 + icons * 22
    return f"""<g>
    {_energy_row(icons, y, "energyMain")}
    <text x="{text_x}" y="{y + 4}" font-family="{SANS}" font-size="14" font-weight="800" fill="white" letter-spacing="-0.3">{svg_text(attack.name)}</text>
    <text x="330" y="{y + 6}" text-anchor="end" font-family="{MONO}" font-size="28" font-weight="900" fill="white">{int(attack.damage)}</text>
    <text x="{text_x}" y="{y + 22}" font-family="{SANS}" font-size="9" fill="rgba(255,255,255,0.8)">{svg_text(attack.description)}</text>
  </g>"""


def _avatar(data: PokemonCardData, theme: LanguageCardTheme, avatar_uri: Optional[str]) -> str:
    if avatar_uri:
        return (
            f'<image href="{escape_xml(avatar_uri)}" x="140" y="75" width="70" height="80" '
            f'clip-path="url(#hexClip)" preserveAspectRatio="xMidYMid slice"/>'
        )
    initial = (data.username[:1] or "?").upper()
    return f"""<circle cx="175" cy="115" r="30" fill="{theme.accent_color}" stroke="rgba(255,255,255,0.5)" stroke-width="2"/>
  <text x="175" y="125" text-anchor="middle" font-family="{SANS}" font-size="28" font-weight="900" fill="white">{svg_text(initial)}</text>"""


def render_card_svg(
    data: PokemonCardData,
    theme: LanguageCardTheme,
    weakness_theme: LanguageCardTheme,
    resistance_theme: LanguageCardTheme,
    images: Optional[CardImages] = None,
) -> str:
    images = images or CardImages()
    evo_start, evo_end = EVOLUTION_GRADIENTS.get(data.evolution_stage, EVOLUTION_GRADIENTS["BASIC"])
    evo_width = badge_width(data.evolution_stage)
    username = _truncate(data.username, USERNAME_LIMIT, "…")

    info = [f"@{data.username}"]
    if data.location:
        info.append(data.location)
    info.append(f"{data.account_age_years}y on GitHub")

    ability_text = _truncate(data.ability.description, ABILITY_LINE_LIMIT * 2)
    ability_lines = wrap_text(ability_text, ABILITY_LINE_LIMIT, 2) if len(ability_text) > ABILITY_WRAP_AT else [ability_text]
    wrapped = len(ability_lines) > 1
    offset = ABILITY_WRAP_OFFSET if wrapped else 0
    ability_rows = "".join(
        f'<tspan x="68" dy="{0 if i == 0 else 11}">{svg_text(line)}</tspan>' for i, line in enumerate(ability_lines)
    )

    bio_rows = "\n  ".join(
        f'<text x="175" y="{454 + i * 11}" text-anchor="middle" font-family="{SANS}" font-size="8" font-style="italic" fill="rgba(255,255,255,0.75)">{svg_text(line)}</text>'
        for i, line in enumerate(wrap_text(data.bio, BIO_LINE_WIDTH, BIO_LINES))
    )

    card_art = (
        f'<image href="{escape_xml(images.card_art)}" x="0" y="0" width="{CARD_WIDTH}" height="{CARD_HEIGHT}" preserveAspectRatio="xMidYMid slice" opacity="0.58"/>'
        if images.card_art else ""
    )
    pattern = "\n    ".join(
        f'<line x1="{i * 10 - 100}" y1="0" x2="{i * 10 + 400}" y2="{CARD_HEIGHT}" stroke="white" stroke-width="0.5"/>'
        for i in range(60)
    )

    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{CARD_WIDTH}" height="{CARD_HEIGHT}" viewBox="0 0 {CARD_WIDTH} {CARD_HEIGHT}" fill="none">
  <defs>
    <linearGradient id="bgGradient" x1="0%" y1="0%" x2="100%" y2="100%">
      <stop offset="0%" stop-color="{theme.border_color}"/>
      <stop offset="40%" stop-color="{theme.accent_color}"/>
      <stop offset="100%" stop-color="{theme.border_color}"/>
    </linearGradient>
    <linearGradient id="evoBadge" x1="0" y1="0" x2="100%" y2="100%">
      <stop offset="0%" stop-color="{evo_start}"/>
      <stop offset="100%" stop-color="{evo_end}"/>
    </linearGradient>
    <linearGradient id="abilityBadge"><stop offset="0%" stop-color="#FF4444"/><stop offset="100%" stop-color="#CC0000"/></linearGradient>
    <radialGradient id="energyMain" cx="35%" cy="35%">
      <stop offset="0%" stop-color="{theme.accent_color}"/>
      <stop offset="100%" stop-color="{theme.border_color}"/>
    </radialGradient>
    <radialGradient id="energyWeak" cx="35%" cy="35%">
      <stop offset="0%" stop-color="{weakness_theme.accent_color}"/>
      <stop offset="100%" stop-color="{weakness_theme.border_color}"/>
    </radialGradient>
    <radialGradient id="energyResist" cx="35%" cy="35%">
      <stop offset="0%" stop-color="{resistance_theme.accent_color}"/>
      <stop offset="100%" stop-color="{resistance_theme.border_color}"/>
    </radialGradient>
    <clipPath id="hexClip">
      <polygon points="{HEX_POINTS}"/>
    </clipPath>
    <filter id="blur"><feGaussianBlur stdDeviation="40"/></filter>
  </defs>

  <rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" rx="16" fill="url(#bgGradient)"/>
  {card_art}
  <rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" rx="16" fill="url(#bgGradient)" opacity="0.72"/>
  <g opacity="0.06">
    {pattern}
  </g>
  <circle cx="175" cy="120" r="100" fill="white" opacity="0.15" filter="url(#blur)"/>
  <rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" rx="16" fill="none" stroke="rgba(220,220,220,0.6)" stroke-width="2"/>

  <rect width="{CARD_WIDTH}" height="48" rx="16" fill="rgba(0,0,0,0.60)"/>
  <rect width="{CARD_WIDTH}" height="48" fill="rgba(0,0,0,0.40)"/>
  <rect x="16" y="12" width="{evo_width}" height="22" rx="11" fill="url(#evoBadge)" stroke="rgba(0,0,0,0.2)" stroke-width="1"/>
  <text x="{16 + evo_width / 2}" y="27" text-anchor="middle" font-family="{SANS}" font-size="9" font-weight="800" fill="#1a1a1a" letter-spacing="1">{svg_text(data.evolution_stage)}</text>
  <text x="{28 + evo_width}" y="30" font-family="{SANS}" font-size="18" font-weight="900" fill="white" letter-spacing="-0.4" stroke="rgba(0,0,0,0.3)" stroke-width="0.5">{svg_text(username)} V</text>
  <text x="260" y="26" font-family="{SANS}" font-size="10" font-weight="600" fill="rgba(255,255,255,0.7)" letter-spacing="1">HP</text>
  <text x="280" y="34" font-family="{SANS}" font-size="30" font-weight="900" fill="white" letter-spacing="-0.5">{int(data.hp)}</text>
  <text x="320" y="33" font-size="20">{svg_text(theme.emoji)}</text>

  <polygon points="{HEX_POINTS}" fill="rgba(255,255,255,0.15)" stroke="rgba(255,255,255,0.3)" stroke-width="3"/>
  <polygon points="175,78 207,97 207,133 175,152 143,133 143,97" fill="white" fill-opacity="0.1"/>
  {_avatar(data, theme, images.avatar)}
  <ellipse cx="175" cy="156" rx="30" ry="8" fill="rgba(0,0,0,0.2)" filter="url(#blur)"/>

  <text x="175" y="172" text-anchor="middle" font-family="{MONO}" font-size="9" fill="rgba(255,255,255,0.7)" letter-spacing="0.5">{svg_text(" · ".join(info))}</text>

  <rect x="12" y="185" width="326" height="{38 + offset}" rx="8" fill="rgba(0,0,0,0.40)" stroke="rgba(255,255,255,0.15)" stroke-width="1"/>
  <rect x="16" y="192" width="44" height="14" rx="3" fill="url(#abilityBadge)"/>
  <text x="38" y="202.5" text-anchor="middle" font-family="{SANS}" font-size="8" font-weight="900" fill="white" letter-spacing="1">ABILITY</text>
  <text x="68" y="201" font-family="{SANS}" font-size="12" font-weight="700" fill="white">{svg_text(data.ability.name)}</text>
  <text x="68" y="215" font-family="{SANS}" font-size="9" fill="rgba(255,255,255,0.85)" font-style="italic">{ability_rows}</text>

  {_attack_block(data.attack1, 250 + offset)}
  <line x1="20" y1="{290 + offset}" x2="330" y2="{290 + offset}" stroke="rgba(255,255,255,0.15)" stroke-width="1"/>
  {_attack_block(data.attack2, 316 + offset)}

  <rect y="370" width="{CARD_WIDTH}" height="120" fill="rgba(0,0,0,0.55)"/>
  <text x="30" y="392" font-family="{MONO}" font-size="7" font-weight="700" fill="rgba(255,255,255,0.7)" letter-spacing="1.2">WEAKNESS</text>
  <circle cx="30" cy="408" r="9" fill="url(#energyWeak)" stroke="rgba(255,255,255,0.3)" stroke-width="1"/>
  <text x="44" y="412" font-family="{SANS}" font-size="11" font-weight="700" fill="white">{svg_text(data.weakness.modifier)}</text>
  <text x="145" y="392" font-family="{MONO}" font-size="7" font-weight="700" fill="rgba(255,255,255,0.7)" letter-spacing="1.2">RESISTANCE</text>
  <circle cx="145" cy="408" r="9" fill="url(#energyResist)" stroke="rgba(255,255,255,0.3)" stroke-width="1"/>
  <text x="159" y="412" font-family="{SANS}" font-size="11" font-weight="700" fill="white">{svg_text(data.resistance.modifier)}</text>
  <text x="262" y="392" font-family="{MONO}" font-size="7" font-weight="700" fill="rgba(255,255,255,0.7)" letter-spacing="1.2">RETREAT</text>
  <g>
    {_energy_row(energy_count(data.retreat_cost, MAX_RETREAT_ICONS), 408, "energyMain", x0=270)}
  </g>

  <line x1="20" y1="426" x2="330" y2="426" stroke="rgba(255,255,255,0.08)" stroke-width="0.5"/>
  <text x="30" y="440" font-family="{MONO}" font-size="8" font-weight="700" fill="rgba(255,255,255,0.8)" letter-spacing="1">XP {int(data.xp)} · VELOCITY {int(data.code_velocity)}%</text>
  <text x="320" y="440" text-anchor="end" font-family="{MONO}" font-size="8" fill="rgba(255,255,255,0.6)" letter-spacing="1">DORMANT {"●" * int(data.zero_star_repo_count)}{"○" * (4 - int(data.zero_star_repo_count))}</text>
  {bio_rows}
  <text x="175" y="482" text-anchor="middle" font-family="{MONO}" font-size="7" fill="rgba(255,255,255,0.5)" letter-spacing="1">gitwrapped · {int(data.programming_language_count)} lang · {svg_text(data.top_language)} · least {svg_text(data.least_used_language)}</text>
</svg>"""


def render_error_card_svg(not_found: bool = True) -> str:
    """Fixed stand-in card; same canvas so embeds never change size."""
    title = "User Not Found" if not_found else "Card Unavailable"
    subtitle = "Check the username and try again" if not_found else "GitHub data could not be loaded right now"
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{CARD_WIDTH}" height="{CARD_HEIGHT}" viewBox="0 0 {CARD_WIDTH} {CARD_HEIGHT}" fill="none">
  <rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" rx="16" fill="#6b7280"/>
  <rect x="8" y="8" width="334" height="474" rx="10" fill="#FFF8F0"/>
  <text x="175" y="230" text-anchor="middle" font-family="{SANS}" font-size="16" font-weight="700" fill="#1a1a2e">{title}</text>
  <text x="175" y="255" text-anchor="middle" font-family="{SANS}" font-size="11" fill="#6b7280">{subtitle}</text>
  <text x="175" y="465" text-anchor="middle" font-family="{MONO}" font-size="7" fill="#d1d5db">gitwrapped</text>
</svg>"""
