# images.py

from __future__ import annotations

import base64
import logging
import os
import re
import time
import urllib.error
import urllib.request
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from urllib.parse import quote

from . import config
from .themes import get_card_art_path

logger = logging.getLogger(__name__)

IMAGE_PROXY = "https://images.weserv.nl/?url="
MIME_TYPES = {".png": "image/png", ".webp": "image/webp", ".jpg": "image/jpeg", ".jpeg": "image/jpeg"}
IMAGE_MIME_RE = re.compile(r"image/[a-z0-9.+-]+")
MAX_IMAGE_BYTES = 1024 * 1024


@dataclass(frozen=True)
class CardImages:
    """Embeddable images for one render; ``None`` means unavailable."""

    avatar: Optional[str] = None
    card_art: Optional[str] = None


def to_data_uri(content: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


def image_mime_type(content_type: Optional[str]) -> Optional[str]:
    """The bare ``image/*`` token of a Content-Type header, or ``None`` if it is anything else."""
    mime_type = (content_type or "image/png").split(";")[0].strip().lower()
    return mime_type if IMAGE_MIME_RE.fullmatch(mime_type) else None


def fetch_image_data_uri(url: str, timeout: Optional[float] = None) -> Optional[str]:
    """Single attempt bounded by ``timeout`` overall.

    Failure, non-2xx, a non-image content type, an oversized body and a
    body that arrives after the deadline all read as unavailable.
    """
    if not url:
        return None
    timeout = config.IMAGE_TIMEOUT if timeout is None else timeout
    started = time.monotonic()
    req = urllib.request.Request(url, headers={"User-Agent": config.HEADERS["User-Agent"]})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = getattr(resp, "status", 200)
            if not 200 <= status < 300:
                logger.debug("Image %s answered %s", url, status)
                return None
            mime_type = image_mime_type(resp.headers.get("Content-Type"))
            if mime_type is None:
                logger.warning("Image %s has unusable content type %r", url, resp.headers.get("Content-Type"))
                return None
            content = resp.read(MAX_IMAGE_BYTES + 1)
    except (urllib.error.URLError, OSError, ValueError) as e:
        logger.debug("Image %s unavailable: %s", url, e)
        return None
    if len(content) > MAX_IMAGE_BYTES:
        logger.debug("Image %s exceeds %d bytes", url, MAX_IMAGE_BYTES)
        return None
    if time.monotonic() - started > timeout:
        logger.debug("Image %s arrived after the %.1fs deadline", url, timeout)
        return None
    return to_data_uri(content, mime_type)


def fetch_avatar(avatar_url: str, timeout: Optional[float] = None) -> Optional[str]:
    """Direct fetch first, then through the resizing proxy; both share one deadline."""
    if not avatar_url:
        return None
    timeout = config.IMAGE_TIMEOUT if timeout is None else timeout
    deadline = time.monotonic() + timeout
    direct = fetch_image_data_uri(avatar_url, timeout)
    if direct:
        return direct
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        return None
    proxied = IMAGE_PROXY + quote(avatar_url.replace("https://", ""), safe="")
    return fetch_image_data_uri(proxied, remaining)


@lru_cache(maxsize=16)
def _read_card_art(path: str) -> Optional[str]:
    ext = os.path.splitext(path)[1].lower()
    try:
        with open(path, "rb") as f:
            return to_data_uri(f.read(), MIME_TYPES.get(ext, "image/jpeg"))
    except OSError as e:
        logger.debug("Card art %s unavailable: %s", path, e)
        return None


def load_card_art(language: str, art_dir: Optional[str] = None) -> Optional[str]:
    art_dir = config.CARD_ART_DIR if art_dir is None else art_dir
    if not art_dir:
        return None
    return _read_card_art(os.path.join(art_dir, get_card_art_path(language)))


def fetch_card_images(avatar_url: str, language: str) -> CardImages:
    """Fetch the avatar and card art concurrently, giving both ``IMAGE_TIMEOUT`` in total.

    Anything still running at the deadline is abandoned and reads as unavailable.
    """
    executor = ThreadPoolExecutor(max_workers=2)
    try:
        avatar = executor.submit(fetch_avatar, avatar_url)
        art = executor.submit(load_card_art, language)
        done, pending = wait((avatar, art), timeout=config.IMAGE_TIMEOUT)
        if pending:
            logger.warning("Card images for %s not ready after %.1fs", avatar_url, config.IMAGE_TIMEOUT)
        return CardImages(
            avatar=avatar.result() if avatar in done else None,
            card_art=art.result() if art in done else None,
        )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
