# tests/test_search.py
from extractors.search import extract_search_optimization
from models import SchemaReport

LD_JSON = '<script type="application/ld+json">{"a":1}</script>'


def test_head_schema_not_in_body():
    html = f"<html><head>{LD_JSON}</head><body><p>x</p></body></html>"
    report = extract_search_optimization(html)
    assert report.head_schema == [LD_JSON]
    assert report.body_schema == []


def test_body_schema_not_in_head():
    html = f"<html><head><title>t</title></head><body>{LD_JSON}</body></html>"
    report = extract_search_optimization(html)
    assert report.head_schema == []
    assert report.body_schema == [LD_JSON]


def test_header_element_is_not_the_head_region():
    html = (
        "<html><head></head><body>"
        f"<header>{LD_JSON}</header>"
        "</body></html>"
    )
    report = extract_search_optimization(html)
    assert report.head_schema == []
    assert len(report.body_schema) == 1


def test_non_ld_json_scripts_are_ignored():
    html = '<head><script type="text/javascript">var a = 1;</script></head>'
    assert extract_search_optimization(html).head_schema == []


def test_data_type_attribute_is_not_a_script_type():
    html = '<head><script data-type="application/ld+json">{"a":1}</script></head>'
    assert extract_search_optimization(html).head_schema == []


def test_ld_json_type_is_case_insensitive_and_unquoted():
    block = '<script TYPE=Application/LD+JSON>{"@type":"Event"}</script>'
    report = extract_search_optimization(f"<head>{block}</head>")
    assert report.head_schema == [block]
    assert report.schema_types == ["Event"]


def test_canonical_href_with_angle_bracket():
    html = '<head><link rel="canonical" href="https://example.com/a>b"></head>'
    assert extract_search_optimization(html).canonical_links == ['<link rel="canonical" href="https://example.com/a>b">']


def test_canonical_is_decoded_element_and_alternate_is_raw():
    html = """<head>
    <link rel="canonical" href="https://example.com/?a=1&amp;b=2">
    <link rel="alternate" hreflang="de" href="https://example.com/de?x=1&amp;y=2">
    <link rel="stylesheet" href="/s.css">
    </head>"""
    report = extract_search_optimization(html)
    assert report.canonical_links == ['<link rel="canonical" href="https://example.com/?a=1&b=2">']
    assert report.alternate_links == ['<link rel="alternate" hreflang="de" href="https://example.com/de?x=1&amp;y=2">']


def test_schema_types_collected_from_graph_and_lists():
    block = (
        '<script type="application/ld+json">'
        '{"@context": "https://schema.org", "@graph": ['
        '{"@type": "Organization"}, {"@type": ["WebSite", "Thing"]}, {"@type": "Organization"}'
        ']}'
        "</script>"
    )
    report = extract_search_optimization(f"<head>{block}</head><body></body>")
    assert report.schema_types == ["Organization", "WebSite", "Thing"]
    assert report.schema_errors == []


def test_invalid_json_is_reported_but_block_kept():
    block = '<script type="application/ld+json">{not json</script>'
    report = extract_search_optimization(f"<head>{block}</head>")
    assert report.head_schema == [block]
    assert len(report.schema_errors) == 1
    assert report.schema_errors[0].startswith("Invalid JSON-LD: ")
    assert report.schema_errors[0].count("Invalid JSON-LD") == 1


def test_no_head_or_body():
    report = extract_search_optimization("<p>fragment</p>")
    assert report == SchemaReport()


def test_non_string_input():
    assert extract_search_optimization(12) == SchemaReport()
