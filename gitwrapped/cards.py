# cards.py

from __future__ import annotations

from . import config
from .badge import build_badge_data, render_badge, render_error_badge
from .card_data import fetch_card_data
from .exceptions import UserNotFoundError
from .github_base import GitHubCardBase, escape_xml, format_bytes
from .images import fetch_card_images
from .languages import calculate_language_stats
from .render import render_card_svg, render_error_card_svg
from .stats import most_recently_pushed, own_repositories
from .themes import get_language_theme, get_type_theme


# ==========================================
# 1. THE TRADING CARD
# ==========================================
class PokemonCard(GitHubCardBase):
    """350x490 trading card built on the low-latency data path."""

    def fetch_data(self):
        data = fetch_card_data(self.user, client=self.client)
        images = fetch_card_images(data.avatar_url, data.top_language)
        return data, images

    def render(self, data) -> str:
        card, images = data
        return render_card_svg(
            card,
            get_language_theme(card.top_language),
            get_type_theme(card.weakness.type),
            get_type_theme(card.resistance.type),
            images,
        )

    def render_error(self, error: Exception) -> str:
        return render_error_card_svg(not_found=isinstance(error, UserNotFoundError))


# ==========================================
# 2. TOP LANGUAGES
# ==========================================
class TopLanguagesCard(GitHubCardBase):
    TOP_N = 6

    @property
    def title(self) -> str:
        return f"{self.user}'s Top Languages"

    def fetch_data(self):
        user, repos = self.client.fetch_user_and_repos(self.user)
        analyzed = most_recently_pushed(own_repositories(repos), config.MAX_ANALYZED_REPOS)
        stats = calculate_language_stats(self.client.fetch_languages_for(user.login, analyzed))
        return stats[: self.TOP_N]

    def render_body(self, stats):
        if not stats:
            return f'<text x="{self.padding}" y="60" class="stat-value">No language data found.</text>', 40

        mode = self.param("mode", "percent").lower()
        row_height = 35
        y_offset = 55
        svg_parts = []

        for lang in stats:
            if mode == "bytes":
                label = format_bytes(lang.bytes)
            elif mode == "both":
                label = f"{lang.percentage}% ({format_bytes(lang.bytes)})"
            else:
                label = f"{lang.percentage}%"

            bar_width = (lang.percentage / 100) * 150

            svg_parts.append(f"""<g transform="translate({self.padding}, {y_offset})">
    <text x="0" y="10" class="stat-name">{escape_xml(lang.language)}</text>
    <rect x="80" y="0" width="150" height="10" rx="3" fill="#21262d"/>
    <rect x="80" y="0" width="{max(bar_width, 2)}" height="10" rx="3" fill="{lang.color}"/>
    <text x="240" y="9" class="stat-value">{escape_xml(label)}</text>
  </g>""")
            y_offset += row_height

        return "\n  ".join(svg_parts), len(stats) * row_height


# ==========================================
# 3. PROFILE BADGE
# ==========================================
class ProfileBadge(GitHubCardBase):
    def fetch_data(self):
        user, repos = self.client.fetch_user_and_repos(self.user)
        return build_badge_data(
            user.login,
            repos,
            portfolio=self.param("portfolio"),
            linkedin=self.param("linkedin"),
        )

    def render(self, data) -> str:
        return render_badge(data, self.param("variant", "compact"), self.param("theme", "light"))

    def render_error(self, error: Exception) -> str:
        return render_error_badge(not_found=isinstance(error, UserNotFoundError))
