# tests/conftest.py
import pytest

from config import PAGE_404_NOT_FOUND, ROBOTS_NOT_FOUND, SITEMAP_NOT_FOUND
from models import RawPage

PAGE_URL = "https://www.example.com/blog/post"

SAMPLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Tom &amp; Jerry | Example</title>
  <meta name="description" content="A page about cats &amp; mice.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta property="og:title" content="Tom and Jerry">
  <meta name="twitter:card" content="summary_large_image">
  <link rel="canonical" href="https://www.example.com/blog/post">
  <link rel="icon" href="/favicon.ico">
  <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Article"}</script>
</head>
<body>
  <h1>Tom &amp; Jerry</h1>
  <h2>Chapter <em>one</em></h2>
  <img data-src="/img/cat.jpg" src="/img/placeholder.gif" alt="A cat">
  <a href="/about">About</a>
  <a href="https://other.com/x" rel="nofollow">Other</a>
  <a href="https://facebook.com/example" target="_blank" rel="noopener noreferrer">Facebook</a>
  <a href="https://partner.org/deal" target="_blank">Partner</a>
  <a href="#top">Top</a>
</body>
</html>
"""

ROBOTS_TEXT = """User-agent: *
Disallow: /private
Sitemap: https://www.example.com/sitemap.xml
"""

SITEMAP_TEXT = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://www.example.com/</loc></url>
  <url><loc>https://www.example.com/blog/post</loc></url>
</urlset>
"""

PROBE_404_TEXT = "<html><body><h1>Oops! Page Not Found</h1></body></html>"


@pytest.fixture
def sample_page():
    """A fully fetched page bundle with every ancillary resource present."""
    return RawPage(
        url=PAGE_URL,
        html=SAMPLE_HTML,
        robots_text=ROBOTS_TEXT,
        sitemap_text=SITEMAP_TEXT,
        probe_404_text=PROBE_404_TEXT,
    )


@pytest.fixture
def bare_page():
    """A page whose ancillary fetches all degraded to their sentinels."""
    return RawPage(
        url=PAGE_URL,
        html="<html><body><p>Hello</p></body></html>",
        robots_text=ROBOTS_NOT_FOUND,
        sitemap_text=SITEMAP_NOT_FOUND,
        probe_404_text=PAGE_404_NOT_FOUND,
    )
