# github_base.py

from __future__ import annotations

import logging
from typing import Optional

from .exceptions import UserNotFoundError
from .github_client import GitHubClient, validate_username

logger = logging.getLogger(__name__)

LONG_DASHES = str.maketrans({"\u2012": "-", "\u2013": "-", "\u2014": "-", "\u2015": "-"})


# --- UTILITIES ---
def escape_xml(text):
    """Sanitize text for SVG output."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def normalize_dashes(text):
    """Long dashes render inconsistently across fonts; use a plain hyphen."""
    return str(text).translate(LONG_DASHES)


def svg_text(text):
    return escape_xml(normalize_dashes(text))


def format_bytes(size):
    """Converts raw bytes into human readable format (KB, MB)."""
    power = 2**10
    n = 0
    power_labels = {0: '', 1: 'KB', 2: 'MB', 3: 'GB'}
    while size > power and n < 3:
        size /= power
        n += 1
    return f"{size:.1f} {power_labels.get(n, '')}".strip()


# ==========================================
# THE ABSTRACT BASE CLASS
# ==========================================
class GitHubCardBase:
    """Fetch, render, and always hand back an SVG document.

    Subclasses implement ``fetch_data`` and either ``render`` (whole
    document) or ``render_body`` (content placed inside the standard frame).
    A malformed username raises ``InvalidUsernameError`` before any fetch;
    every later failure becomes the subclass's error card.
    """

    def __init__(self, username: Optional[str], query_params: Optional[dict] = None, client: Optional[GitHubClient] = None):
        self.user = username
        self.params = query_params or {}
        self.client = client or GitHubClient()
        self.error: Optional[Exception] = None
        # Default styling constants
        self.card_width = 350
        self.padding = 20
        self.header_height = 40

    def param(self, name: str, default: str = "") -> str:
        return self.params.get(name, [default])[0]

    @property
    def title(self) -> str:
        return f"{self.user}'s Stats"

    def render_error(self, error: Exception) -> str:
        """Standardized error card."""
        message = "User not found" if isinstance(error, UserNotFoundError) else "Could not load GitHub data"
        return f"""<svg width="400" height="80" viewBox="0 0 400 80" xmlns="http://www.w3.org/2000/svg">
  <style>.header {{ font: 600 14px "Segoe UI", Ubuntu, Sans-Serif; fill: #ff5555; }} .text {{ font: 400 12px monospace; fill: #f85149; }}</style>
  <rect width="400" height="80" fill="#0d1117" rx="6" stroke="#30363d"/>
  <text x="20" y="30" class="header">Error: {escape_xml(self.user)}</text>
  <text x="20" y="56" class="text">{escape_xml(message)}</text>
</svg>"""

    def _render_frame(self, title, body_content, content_height):
        """Wraps specific content in the standard card design."""
        total_height = self.header_height + content_height + self.padding

        return f"""<svg width="{self.card_width}" height="{total_height}" viewBox="0 0 {self.card_width} {total_height}" xmlns="http://www.w3.org/2000/svg">
  <style>
    .title {{ font: 600 16px "Segoe UI", Ubuntu, Sans-Serif; fill: #c9d1d9; }}
    .stat-name {{ font: 600 13px "Segoe UI", Ubuntu, Sans-Serif; fill: #c9d1d9; }}
    .stat-value {{ font: 400 12px "Segoe UI", Ubuntu, Sans-Serif; fill: #8b949e; }}
  </style>
  <rect width="{self.card_width}" height="{total_height}" fill="#0d1117" rx="6" stroke="#30363d" stroke-width="1"/>
  <text x="{self.padding}" y="30" class="title">{escape_xml(title)}</text>
  {body_content}
</svg>"""

    def fetch_data(self):
        """Override this method to fetch data from GitHub."""
        raise NotImplementedError

    def render_body(self, data):
        """Override this method to generate SVG body content. Returns (svg_str, height_int)."""
        raise NotImplementedError

    def render(self, data) -> str:
        body, height = self.render_body(data)
        return self._render_frame(self.title, body, height)

    def process(self) -> str:
        """Main execution flow."""
        validate_username(self.user)
        try:
            return self.render(self.fetch_data())
        except UserNotFoundError as e:
            logger.info("Rendering not-found card for %s", self.user)
            self.error = e
        except Exception as e:
            logger.exception("Rendering error card for %s", self.user)
            self.error = e
        return self.render_error(self.error)
