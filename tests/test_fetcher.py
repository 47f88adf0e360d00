# tests/test_fetcher.py
import pytest
import requests

from collector.fetcher import fetch_page_bundle
from config import PAGE_404_NOT_FOUND, PROBE_404_PATH, ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND

PAGE = "https://example.com/blog/post"
ROBOTS = "https://example.com/robots.txt"
SITEMAP = "https://example.com/sitemap.xml"
PROBE = f"https://example.com{PROBE_404_PATH}"


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Maps URL → FakeResponse or exception instance; records calls."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, timeout=None, allow_redirects=True):
        self.calls.append(url)
        outcome = self.routes.get(url, FakeResponse(404, "missing"))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def test_full_bundle():
    session = FakeSession({
        PAGE:    FakeResponse(200, "<html>page</html>"),
        ROBOTS:  FakeResponse(200, "User-agent: *"),
        SITEMAP: FakeResponse(200, "<urlset/>"),
        PROBE:   FakeResponse(404, "<h1>Page not found</h1>"),
    })
    page = fetch_page_bundle(PAGE, session=session)

    assert page.fetch_error is None
    assert page.html == "<html>page</html>"
    assert page.robots_text == "User-agent: *"
    assert page.sitemap_text == "<urlset/>"
    assert page.probe_404_text == "<h1>Page not found</h1>"
    assert set(session.calls) == {PAGE, ROBOTS, SITEMAP, PROBE}


def test_ancillary_failures_degrade_to_sentinels():
    session = FakeSession({
        PAGE:    FakeResponse(200, "<html>page</html>"),
        ROBOTS:  FakeResponse(404, "not here"),
        SITEMAP: requests.ConnectionError("refused"),
        PROBE:   FakeResponse(500, "server error"),
    })
    page = fetch_page_bundle(PAGE, session=session)

    assert page.fetch_error is None
    assert page.html == "<html>page</html>"
    assert page.robots_text == ROBOTS_NOT_FOUND
    assert page.sitemap_text == SITEMAP_NOT_FOUND
    assert page.probe_404_text == PAGE_404_NOT_FOUND


def test_soft_404_body_is_kept():
    session = FakeSession({
        PAGE:  FakeResponse(200, "<html>page</html>"),
        PROBE: FakeResponse(200, "<html>home page served for everything</html>"),
    })
    page = fetch_page_bundle(PAGE, session=session)
    assert page.probe_404_text == "<html>home page served for everything</html>"


def test_empty_robots_and_sitemap_are_present():
    session = FakeSession({
        PAGE:    FakeResponse(200, "<html>page</html>"),
        ROBOTS:  FakeResponse(200, ""),
        SITEMAP: FakeResponse(200, ""),
    })
    page = fetch_page_bundle(PAGE, session=session)
    assert page.robots_text == ""
    assert page.sitemap_text == ""


def test_empty_404_body_becomes_sentinel():
    session = FakeSession({
        PAGE:  FakeResponse(200, "<html>page</html>"),
        PROBE: FakeResponse(404, ""),
    })
    page = fetch_page_bundle(PAGE, session=session)
    assert page.probe_404_text == PAGE_404_NOT_FOUND


@pytest.mark.parametrize("outcome", [
    FakeResponse(500, "boom"),
    requests.Timeout("too slow"),
])
def test_main_page_failure_sets_fetch_error(outcome):
    session = FakeSession({PAGE: outcome})
    page = fetch_page_bundle(PAGE, session=session)

    assert page.fetch_error.startswith("Failed to fetch the source code")
    assert page.html == ""
    assert page.robots_text == ROBOTS_NOT_FOUND
    assert session.calls == [PAGE]


def test_invalid_url_is_not_fetched():
    session = FakeSession({})
    page = fetch_page_bundle("not a url", session=session)
    assert page.fetch_error.startswith("Invalid URL")
    assert session.calls == []
