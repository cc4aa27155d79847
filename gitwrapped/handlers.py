"""Response assembly shared by the serverless endpoint modules under ``api/``.

Each ``respond_*`` function takes a ``BaseHTTPRequestHandler`` and writes
one complete response. Image endpoints always answer 200 with some SVG
once the username is valid; JSON endpoints answer with real statuses.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from . import config
from .card_data import build_card_data, fetch_card_data
from .cards import PokemonCard, ProfileBadge, TopLanguagesCard
from .exceptions import GitHubAPIError, InvalidUsernameError, UserNotFoundError
from .github_client import validate_username
from .rate_limit import limiter
from .stats import fetch_user_stats

logger = logging.getLogger(__name__)

SVG_TYPE = "image/svg+xml; charset=utf-8"
JSON_TYPE = "application/json"


# --- UTILITIES ---
def parse_query(path: str) -> Dict[str, List[str]]:
    return parse_qs(urlparse(path).query) if "?" in path else {}


def client_ip(handler) -> str:
    forwarded = handler.headers.get("X-Forwarded-For", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return handler.client_address[0] if handler.client_address else "unknown"


def send(handler, status: int, body: str, content_type: str, cache: Optional[str] = None,
         extra_headers: Optional[Dict[str, str]] = None) -> None:
    payload = body.encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", content_type)
    handler.send_header("Content-Length", str(len(payload)))
    if cache:
        handler.send_header("Cache-Control", cache)
    for name, value in (extra_headers or {}).items():
        handler.send_header(name, value)
    handler.end_headers()
    handler.wfile.write(payload)


def send_json(handler, status: int, data, cache: Optional[str] = None, extra_headers=None) -> None:
    send(handler, status, json.dumps(data), JSON_TYPE, cache or "no-store", extra_headers)


def _username_or_reject(handler, query) -> Optional[str]:
    username = query.get("username", [""])[0].strip()
    try:
        return validate_username(username)
    except InvalidUsernameError:
        send_json(handler, 400, {"error": "Invalid GitHub username"})
        return None


def _rate_limited(handler, scope: str) -> bool:
    retry_after = limiter.check(f"{scope}:{client_ip(handler)}")
    if retry_after is None:
        return False
    logger.info("Rate limited %s request from %s", scope, client_ip(handler))
    send_json(
        handler, 429, {"error": "Too many requests. Please try again later."},
        extra_headers={"Retry-After": str(retry_after)},
    )
    return True


def _send_json_result(handler, build) -> None:
    """Run ``build`` and map failures onto JSON statuses."""
    try:
        data = build()
    except UserNotFoundError:
        send_json(handler, 404, {"error": "User not found"})
        return
    except GitHubAPIError as e:
        logger.warning("Upstream failure: %s", e)
        send_json(handler, 502, {"error": "GitHub API error"})
        return
    except Exception:
        logger.exception("Unexpected failure building JSON response")
        send_json(handler, 500, {"error": "Internal error"})
        return
    send_json(handler, 200, data, cache=config.CACHE_OK)


def _send_svg_card(handler, card) -> None:
    svg = card.process()
    send(handler, 200, svg, SVG_TYPE, config.CACHE_ERROR if card.error else config.CACHE_OK)


# ==========================================
# ENDPOINTS
# ==========================================
def respond_card(handler) -> None:
    query = parse_query(handler.path)
    username = _username_or_reject(handler, query)
    if username is None or _rate_limited(handler, "card"):
        return
    if query.get("format", [""])[0].lower() == "json":
        _send_json_result(handler, lambda: fetch_card_data(username).to_dict())
        return
    _send_svg_card(handler, PokemonCard(username, query))


def respond_badge(handler) -> None:
    query = parse_query(handler.path)
    username = _username_or_reject(handler, query)
    if username is None or _rate_limited(handler, "badge"):
        return
    _send_svg_card(handler, ProfileBadge(username, query))


def respond_language_stats(handler) -> None:
    query = parse_query(handler.path)
    username = _username_or_reject(handler, query)
    if username is None:
        return
    _send_svg_card(handler, TopLanguagesCard(username, query))


def respond_stats(handler) -> None:
    query = parse_query(handler.path)
    username = _username_or_reject(handler, query)
    if username is None:
        return

    def build():
        stats = fetch_user_stats(username)
        payload = stats.to_dict()
        payload["card"] = build_card_data(stats).to_dict()
        return payload

    _send_json_result(handler, build)
