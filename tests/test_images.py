import socket
import threading
import time
import urllib.request

import pytest

from conftest import FakeResponse
from gitwrapped import images
from gitwrapped.images import (
    IMAGE_PROXY, MAX_IMAGE_BYTES, fetch_avatar, fetch_card_images, fetch_image_data_uri, image_mime_type, load_card_art,
)

AVATAR = "https://avatars.githubusercontent.com/u/1"


def test_image_becomes_data_uri(github):
    github.add(AVATAR, b"\x89PNG", content_type="image/png")
    assert fetch_image_data_uri(AVATAR) == "data:image/png;base64,iVBORw=="


def test_non_2xx_is_unavailable(github):
    github.add(AVATAR, b"", status=503)
    assert fetch_image_data_uri(AVATAR) is None
    assert fetch_image_data_uri("") is None


def test_timeout_is_unavailable(monkeypatch):
    def slow(req, timeout=None):
        raise socket.timeout("timed out")

    monkeypatch.setattr(urllib.request, "urlopen", slow)
    assert fetch_image_data_uri(AVATAR, timeout=0.1) is None


def test_avatar_falls_back_to_proxy(github):
    proxied = IMAGE_PROXY + "avatars.githubusercontent.com%2Fu%2F1"
    github.add(proxied, b"GIF8", content_type="image/gif")
    assert fetch_avatar(AVATAR) == "data:image/gif;base64,R0lGOA=="
    assert github.calls == [AVATAR, proxied]


def test_card_art_from_directory(tmp_path):
    (tmp_path / "python.jpg").write_bytes(b"JPEG")
    assert load_card_art("Python", str(tmp_path)) == "data:image/jpeg;base64,SlBFRw=="
    assert load_card_art("Go", str(tmp_path)) is None
    assert load_card_art("Python", "") is None


def test_fetch_card_images_joins_both(github, monkeypatch, tmp_path):
    (tmp_path / "python.jpg").write_bytes(b"JPEG")
    monkeypatch.setattr(images.config, "CARD_ART_DIR", str(tmp_path))
    result = fetch_card_images(AVATAR, "Python")
    assert result.avatar is None
    assert result.card_art.startswith("data:image/jpeg;base64,")


@pytest.mark.parametrize("content_type, expected", [
    ("image/png", "image/png"),
    ("IMAGE/JPEG; charset=binary", "image/jpeg"),
    ("image/svg+xml", "image/svg+xml"),
    (None, "image/png"),
    ("text/html", None),
    ('image/png"/><script>alert(1)</script><x a="', None),
])
def test_image_mime_type(content_type, expected):
    assert image_mime_type(content_type) == expected


def test_hostile_content_type_is_unavailable(github):
    github.add(AVATAR, b"\x89PNG", content_type='image/png"/><script>alert(1)</script><x a="')
    assert fetch_image_data_uri(AVATAR) is None


def test_oversized_image_is_unavailable(github):
    github.add(AVATAR, b"x" * (MAX_IMAGE_BYTES + 1), content_type="image/png")
    assert fetch_image_data_uri(AVATAR) is None


def test_slow_body_past_deadline_is_unavailable(monkeypatch):
    class SlowResponse(FakeResponse):
        def read(self, amt=None):
            time.sleep(0.2)
            return super().read(amt)

    monkeypatch.setattr(urllib.request, "urlopen", lambda req, timeout=None: SlowResponse(b"\x89PNG", content_type="image/png"))
    assert fetch_image_data_uri(AVATAR, timeout=0.05) is None


def test_avatar_attempts_share_one_deadline(monkeypatch):
    timeouts = []

    def slow_fetch(url, timeout=None):
        timeouts.append(timeout)
        time.sleep(0.1)
        return None

    monkeypatch.setattr(images, "fetch_image_data_uri", slow_fetch)
    assert fetch_avatar(AVATAR, timeout=0.05) is None
    assert timeouts == [0.05]


def test_fetch_card_images_stops_waiting_at_deadline(monkeypatch, tmp_path):
    (tmp_path / "python.jpg").write_bytes(b"JPEG")
    release = threading.Event()
    monkeypatch.setattr(images.config, "CARD_ART_DIR", str(tmp_path))
    monkeypatch.setattr(images.config, "IMAGE_TIMEOUT", 0.1)
    monkeypatch.setattr(images, "fetch_avatar", lambda url: release.wait(5) and None)

    started = time.monotonic()
    try:
        result = fetch_card_images(AVATAR, "Python")
    finally:
        release.set()
    assert time.monotonic() - started < 2
    assert result.avatar is None
    assert result.card_art == "data:image/jpeg;base64,SlBFRw=="
