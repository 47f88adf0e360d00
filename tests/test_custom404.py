# tests/test_custom404.py
import pytest

from config import PAGE_404_NOT_FOUND, ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND
from extractors.custom404 import detect_custom_404
from models import AdditionalConditions, Status

URL = "https://example.com/private"
ROBOTS = "User-agent: *\nDisallow: /private\n"
SITEMAP = "<urlset><url><loc>https://example.com/private</loc></url></urlset>"


def test_default_indicators_detect_custom_page():
    result = detect_custom_404("<html></html>", URL, ROBOTS, SITEMAP, "<h1>Oops! Page Not Found</h1>")
    assert result.custom404 == Status.YES
    assert "page not found" in result.matched_indicators
    assert "oops" in result.matched_indicators


def test_server_default_text_is_an_indicator():
    probe = "<p>The requested URL was not found on this server.</p>"
    result = detect_custom_404("", URL, ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND, probe)
    assert result.custom404 == Status.YES


def test_no_indicator_means_no():
    result = detect_custom_404("", URL, ROBOTS, SITEMAP, "<h1>Welcome home</h1>")
    assert result.custom404 == Status.NO
    assert result.matched_indicators == []


def test_custom_indicator_list():
    result = detect_custom_404("", URL, ROBOTS, SITEMAP, "Nichts gefunden", indicators=["nichts gefunden"])
    assert result.custom404 == Status.YES


@pytest.mark.parametrize("probe", [None, 404, PAGE_404_NOT_FOUND])
def test_missing_probe_is_unknown(probe):
    result = detect_custom_404("", URL, ROBOTS, SITEMAP, probe)
    assert result.custom404 == Status.UNDETERMINED
    assert result.additional_conditions == AdditionalConditions()


def test_additional_conditions():
    result = detect_custom_404("<p>Error 404</p>", URL, ROBOTS, SITEMAP, "sorry")
    cond = result.additional_conditions
    assert cond.is_404_in_main_source_code is True
    assert cond.is_robots_blocked is True
    assert cond.is_in_sitemap is True


def test_additional_conditions_negative():
    result = detect_custom_404(
        "<p>All good</p>", "https://example.com/public", ROBOTS, SITEMAP, "sorry",
    )
    cond = result.additional_conditions
    assert cond.is_404_in_main_source_code is False
    assert cond.is_robots_blocked is False
    assert cond.is_in_sitemap is False


def test_sentinels_are_not_blocked_or_listed():
    result = detect_custom_404("", URL, ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND, "sorry")
    assert result.additional_conditions.is_robots_blocked is False
    assert result.additional_conditions.is_in_sitemap is False


def test_conditions_do_not_affect_decision():
    result = detect_custom_404("404 not found", URL, ROBOTS, SITEMAP, "<h1>Home</h1>")
    assert result.custom404 == Status.NO
    assert result.additional_conditions.is_404_in_main_source_code is True
