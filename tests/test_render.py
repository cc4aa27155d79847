import dataclasses

import pytest
from lxml import etree

from conftest import NOW, make_repo, make_user
from gitwrapped.badge import BadgeData, build_badge_data, render_badge, render_error_badge
from gitwrapped.card_data import build_card_data
from gitwrapped.github_base import escape_xml, format_bytes, normalize_dashes
from gitwrapped.images import CardImages
from gitwrapped.languages import calculate_language_stats
from gitwrapped.models import Ability, Attack, GitHubUser, Repository
from gitwrapped.render import badge_width, energy_count, render_card_svg, render_error_card_svg, wrap_text
from gitwrapped.stats import derive_stats
from gitwrapped.themes import get_language_theme, get_type_theme

SVG_NS = "{http://www.w3.org/2000/svg}"


def parse(svg):
    return etree.fromstring(svg.encode("utf-8"))


def texts(root):
    return " ".join("".join(el.itertext()) for el in root.iter(f"{SVG_NS}text"))


def make_card(repos=(), languages=({"Python": 100},), **user_fields):
    user = GitHubUser.from_api(make_user(**user_fields))
    repos = [Repository.from_api(make_repo(i, **r)) for i, r in enumerate(repos, 1)]
    stats = derive_stats(user, repos, calculate_language_stats(languages), now=NOW)
    return build_card_data(stats, now=NOW)


def render(card, images=None):
    theme = get_language_theme(card.top_language)
    return render_card_svg(card, theme, get_type_theme(card.weakness.type), get_type_theme(card.resistance.type), images)


def test_card_is_well_formed_with_fixed_canvas():
    root = parse(render(make_card([{"name": "api", "stars": 12}])))
    assert root.get("width") == "350"
    assert root.get("height") == "490"
    assert "api" in texts(root)
    assert "STAGE 2" in texts(root)


def test_hostile_username_is_escaped():
    card = dataclasses.replace(make_card(), username="<script>x", bio="a & b \"quoted\" 'single'")
    svg = render(card)
    assert "<script>" not in svg
    assert "&lt;script&gt;" in svg
    root = parse(svg)
    assert "<script>" in texts(root)


def test_empty_bio_and_location_render():
    card = dataclasses.replace(make_card(), bio="", location="")
    root = parse(render(card))
    info = texts(root)
    assert "@octocat · 7y on GitHub" in info


def test_long_description_renders_truncated():
    card = make_card([{"name": "tool", "description": "d" * 120}])
    svg = render(card)
    parse(svg)
    assert ("d" * 42 + "...") in svg
    assert "d" * 43 not in svg


def test_long_dashes_normalized():
    card = dataclasses.replace(make_card(), bio="before \u2014 after")
    svg = render(card)
    assert "\u2014" not in svg
    assert "before - after" in svg
    assert normalize_dashes("a\u2013b\u2012c") == "a-b-c"


def test_placeholder_avatar_when_unavailable():
    root = parse(render(make_card(), CardImages()))
    assert not [el for el in root.iter(f"{SVG_NS}image")]
    assert "O" in [el.text for el in root.iter(f"{SVG_NS}text")]


def test_embedded_images_used_when_available():
    images = CardImages(avatar="data:image/png;base64,AAAA", card_art="data:image/jpeg;base64,BBBB")
    root = parse(render(make_card(), images))
    hrefs = [el.get("href") for el in root.iter(f"{SVG_NS}image")]
    assert hrefs == ["data:image/jpeg;base64,BBBB", "data:image/png;base64,AAAA"]


def test_image_href_cannot_break_out_of_attribute():
    hostile = 'data:image/png"/><script>alert(1)</script><x a="'
    root = parse(render(make_card(), CardImages(avatar=hostile, card_art=hostile)))
    assert not list(root.iter(f"{SVG_NS}script"))
    assert [el.get("href") for el in root.iter(f"{SVG_NS}image")] == [hostile, hostile]


def test_ability_wrap_shifts_attack_rows():
    base = make_card()
    short = dataclasses.replace(base, ability=Ability("Quick", "short text"))
    long = dataclasses.replace(base, ability=Ability("Wordy", "word " * 20))
    short_root, long_root = parse(render(short)), parse(render(long))

    def divider_y(root):
        return [el.get("y1") for el in root.iter(f"{SVG_NS}line") if (el.get("x1"), el.get("x2")) == ("20", "330")][0]

    assert divider_y(short_root) == "290"
    assert divider_y(long_root) == "296"


def test_energy_icons_clamped():
    huge = Attack(name="Overflow", description="", damage=999, energy_cost=99)
    card = dataclasses.replace(make_card(), attack1=huge)
    parse(render(card))
    assert energy_count(99) == 14
    assert energy_count(-3) == 0


def test_badge_width_scales_with_label():
    assert badge_width("BASIC") == 65
    assert badge_width("A MUCH LONGER LABEL") > 65


def test_wrap_text_limits_lines():
    lines = wrap_text("word " * 60, 20, 2)
    assert len(lines) == 2
    assert lines[-1].endswith("...")
    assert wrap_text("", 20, 2) == []


@pytest.mark.parametrize("not_found, title", [(True, "User Not Found"), (False, "Card Unavailable")])
def test_error_card(not_found, title):
    root = parse(render_error_card_svg(not_found))
    assert (root.get("width"), root.get("height")) == ("350", "490")
    assert title in texts(root)


@pytest.mark.parametrize("variant, size", [
    ("compact", ("320", "80")),
    ("identity", ("320", "80")),
    ("minimal", ("200", "58")),
    ("bogus", ("320", "80")),
])
def test_badge_variants(variant, size):
    data = BadgeData("octo<cat>", repos=4, language_count=2, active_year=2026, portfolio="octo.dev", linkedin="in/octo")
    svg = render_badge(data, variant, "dark")
    root = parse(svg)
    assert (root.get("width"), root.get("height")) == size
    assert "octo<cat>" in texts(root)


def test_badge_unknown_theme_falls_back_to_light():
    data = BadgeData("octocat", 1, 1, 2026)
    assert render_badge(data, "compact", "neon") == render_badge(data, "compact", "light")


def test_error_badge_size():
    root = parse(render_error_badge())
    assert (root.get("width"), root.get("height")) == ("200", "40")


@pytest.mark.parametrize("not_found, message", [(True, "User not found"), (False, "Badge unavailable")])
def test_error_badge_message(not_found, message):
    assert texts(parse(render_error_badge(not_found=not_found))) == message


def test_build_badge_data_counts_own_repos():
    repos = [Repository.from_api(make_repo(i, f"r{i}", language=lang, fork=fork))
             for i, (lang, fork) in enumerate([("Python", False), ("Go", False), ("Python", False), ("Rust", True), (None, False)])]
    data = build_badge_data("octocat", repos, now=NOW)
    assert data.repos == 4
    assert data.language_count == 2
    assert data.active_year == 2026


def test_escape_xml_handles_all_five():
    assert escape_xml("<a href='x'>&\"</a>") == "&lt;a href=&apos;x&apos;&gt;&amp;&quot;&lt;/a&gt;"


def test_format_bytes():
    assert format_bytes(512) == "512.0"
    assert format_bytes(2048) == "2.0 KB"
    assert format_bytes(3 * 1024 ** 2) == "3.0 MB"
