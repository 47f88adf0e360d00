# tests/test_indexation.py
from collector.robots import is_url_allowed, parse_robots_text
from collector.sitemap import parse_sitemap_text
from config import ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND
from extractors.indexation import check_indexation

ROBOTS = """# robots for example.com
User-agent: Googlebot
Disallow: /no-google

User-agent: *
Disallow: /private
Allow: /private/public
Crawl-delay: 2
Sitemap: https://example.com/sitemap.xml
"""

URLSET = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://example.com/</loc></url>
  <url><loc> https://example.com/about/ </loc></url>
</urlset>
"""

SITEMAP_INDEX = """<?xml version="1.0" encoding="UTF-8"?>
<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <sitemap><loc>https://example.com/sitemap-posts.xml</loc></sitemap>
  <sitemap><loc>https://example.com/sitemap-pages.xml</loc></sitemap>
</sitemapindex>
"""


# --- robots.txt ---

def test_robots_groups():
    data = parse_robots_text(ROBOTS)
    assert {"agent": "Googlebot", "path": "/no-google"} in data.disallow_rules
    assert {"agent": "*", "path": "/private"} in data.disallow_rules
    assert {"agent": "*", "path": "/no-google"} not in data.disallow_rules
    assert data.allow_rules == [{"agent": "*", "path": "/private/public"}]
    assert data.crawl_delay == 2.0
    assert data.sitemap_urls == ["https://example.com/sitemap.xml"]
    assert data.parse_errors == []


def test_consecutive_user_agents_share_rules():
    data = parse_robots_text("User-agent: a\nUser-agent: b\nDisallow: /x\n")
    assert data.disallow_rules == [{"agent": "a", "path": "/x"}, {"agent": "b", "path": "/x"}]


def test_robots_allow_and_disallow_matching():
    data = parse_robots_text(ROBOTS)
    assert is_url_allowed("https://example.com/", data) is True
    assert is_url_allowed("https://example.com/private/page", data) is False
    assert is_url_allowed("https://example.com/private/public/page", data) is True
    assert is_url_allowed("https://example.com/no-google", data) is True
    assert is_url_allowed("https://example.com/no-google", data, user_agent="Googlebot") is False


def test_empty_disallow_allows_everything():
    data = parse_robots_text("User-agent: *\nDisallow:\n")
    assert is_url_allowed("https://example.com/anything", data) is True


def test_robots_parse_errors():
    data = parse_robots_text("User-agent: *\nthis line has no colon\nCrawl-delay: soon\n")
    assert len(data.parse_errors) == 2


# --- sitemap.xml ---

def test_urlset():
    data = parse_sitemap_text(URLSET)
    assert data.is_index is False
    assert data.urls == ["https://example.com/", "https://example.com/about/"]


def test_sitemap_index():
    data = parse_sitemap_text(SITEMAP_INDEX)
    assert data.is_index is True
    assert data.child_sitemaps == [
        "https://example.com/sitemap-posts.xml",
        "https://example.com/sitemap-pages.xml",
    ]


def test_sitemap_without_namespace():
    data = parse_sitemap_text("<urlset><url><loc>https://example.com/a</loc></url></urlset>")
    assert data.urls == ["https://example.com/a"]


def test_malformed_sitemap():
    data = parse_sitemap_text("<urlset><url><loc>broken")
    assert data.urls == []
    assert data.parse_errors[0].startswith("XML parse error")


def test_unexpected_root():
    data = parse_sitemap_text("<rss><channel/></rss>")
    assert data.parse_errors == ["Unexpected root element <rss> in sitemap"]


def test_external_entities_are_not_resolved():
    xml = """<?xml version="1.0"?>
<!DOCTYPE urlset [<!ENTITY xxe SYSTEM "file:///etc/passwd">]>
<urlset><url><loc>&xxe;</loc></url></urlset>"""
    data = parse_sitemap_text(xml)
    assert all("root:" not in u for u in data.urls)


# --- Indexation check ---

def test_sentinels_mean_absent():
    report = check_indexation(ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND, "https://example.com/")
    assert report.robots_found is False
    assert report.sitemap_found is False
    assert report.page_allowed is None
    assert report.page_in_sitemap is None
    assert report.sitemap_url_count == 0


def test_non_string_inputs_mean_absent():
    report = check_indexation(None, 42)
    assert report.robots_found is False
    assert report.sitemap_found is False


def test_empty_files_are_present():
    report = check_indexation("", "", "https://example.com/")
    assert report.robots_found is True
    assert report.sitemap_found is True
    assert report.page_allowed is True
    assert report.page_in_sitemap is False
    assert report.parse_errors == ["sitemap.xml: Empty sitemap document"]


def test_full_indexation_report():
    report = check_indexation(ROBOTS, URLSET, "https://example.com/about")
    assert report.robots_found is True
    assert report.sitemap_found is True
    assert report.robots_content == ROBOTS
    assert report.declared_sitemaps == ["https://example.com/sitemap.xml"]
    assert report.crawl_delay == 2.0
    assert report.page_allowed is True
    # Trailing slash differences are ignored
    assert report.page_in_sitemap is True
    assert report.sitemap_url_count == 2


def test_blocked_page():
    report = check_indexation(ROBOTS, URLSET, "https://example.com/private/secret")
    assert report.page_allowed is False
    assert report.page_in_sitemap is False


def test_sitemap_index_urls_are_counted():
    report = check_indexation(ROBOTS_NOT_FOUND, SITEMAP_INDEX)
    assert report.sitemap_url_count == 2
    assert report.page_in_sitemap is None


def test_parse_errors_are_prefixed():
    report = check_indexation("Crawl-delay: never", "<urlset>")
    assert any(e.startswith("robots.txt: ") for e in report.parse_errors)
    assert any(e.startswith("sitemap.xml: ") for e in report.parse_errors)
