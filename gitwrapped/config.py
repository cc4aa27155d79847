# config.py

import logging
import os

# --- SHARED CONFIG ---
TOKEN = os.environ.get("GITHUB_TOKEN", "")
API_URL = os.environ.get("GITHUB_API_URL", "https://api.github.com").rstrip("/")
API_TIMEOUT = float(os.environ.get("GITHUB_TIMEOUT", "5"))
IMAGE_TIMEOUT = float(os.environ.get("IMAGE_TIMEOUT", "3"))
CARD_ART_DIR = os.environ.get("CARD_ART_DIR", "")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")

HEADERS = {
    "Accept": "application/vnd.github.v3+json",
    "User-Agent": "GitWrapped-Cards",
    "Cache-Control": "max-age=3600",
}

# Pagination and fan-out bounds
PER_PAGE = 100
MAX_PAGES = 10
MAX_ANALYZED_REPOS = 20
MAX_CARD_REPOS = 10
MAX_WORKERS = 10

RECENT_ACTIVITY_DAYS = 30
VELOCITY_WINDOW_MONTHS = 6

# Response cache headers
CACHE_OK = "public, max-age=3600, s-maxage=3600"
CACHE_ERROR = "public, max-age=300"


def configure_logging(level=None):
    """Install a root handler once; later calls only adjust the level."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
