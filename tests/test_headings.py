# tests/test_headings.py
from config import NOT_FOUND
from extractors.headings import extract_headings
from models import HeadingSet


def test_multiple_headings_in_document_order():
    headings = extract_headings("<h1>A</h1><p>x</p><h1>B</h1>")
    assert headings.h1 == ["A", "B"]


def test_missing_level_reports_not_found():
    headings = extract_headings("<h2>x</h2>")
    assert headings.h1 == NOT_FOUND
    assert headings.h2 == ["x"]
    assert headings.count(1) == 0
    assert headings.count(2) == 1


def test_nested_tags_script_and_entities_are_cleaned():
    html = '<h2 class="t">Hello <span>big</span> &amp; <script>var x = 1;</script>world</h2>'
    assert extract_headings(html).h2 == ["Hello big & world"]


def test_style_blocks_are_removed():
    html = "<h3><style>.a{color:red}</style>Styled</h3>"
    assert extract_headings(html).h3 == ["Styled"]


def test_empty_headings_are_dropped():
    html = '<h4>   </h4><h4><img src="x.png"></h4><h4>Real</h4>'
    assert extract_headings(html).h4 == ["Real"]


def test_only_empty_headings_give_not_found():
    assert extract_headings("<h5> </h5>").h5 == NOT_FOUND


def test_case_insensitive_and_multiline():
    html = "<H6\n  id='x'>Line one\n  line two</H6>"
    assert extract_headings(html).h6 == ["Line one line two"]


def test_header_element_is_not_a_heading():
    html = "<header>Site header</header><h1>Title</h1>"
    assert extract_headings(html).h1 == ["Title"]


def test_non_string_input():
    headings = extract_headings(None)
    assert headings == HeadingSet()
    assert all(headings.level(n) == NOT_FOUND for n in range(1, 7))


def test_attribute_value_with_angle_bracket():
    headings = extract_headings('<h2 title="a > b">Shop</h2>')
    assert headings.h2 == ["Shop"]
