from papers_page.config import MR_LOOKUP_URL
from papers_page.crossref import CrossrefSource
from papers_page.records import CanonicalRecord
from papers_page.render import lookup_url, render_card, render_cards

NASTY = "<b>\"Fish\" & 'Chips'</b>"
NASTY_ESCAPED = "&lt;b&gt;&quot;Fish&quot; &amp; &#x27;Chips&#x27;&lt;/b&gt;"


def card(record, **kwargs):
    return render_card(record, lookup_template=MR_LOOKUP_URL, **kwargs)


def test_missing_title_renders_placeholder():
    html = card(CrossrefSource().to_canonical({}))
    assert "(untitled)" in html
    assert "<strong>Authors:</strong>" in html


def test_every_text_field_is_escaped():
    record = CanonicalRecord(
        title=NASTY,
        authors=(NASTY, "Luca Ugaglia"),
        journal=NASTY,
        volume="<1>",
        year="2020",
        url="https://example.org/?a=1&b=2",
    )
    html = card(record)
    assert html.count(NASTY_ESCAPED) == 3
    assert "<b>" not in html
    assert '"Fish"' not in html
    assert "'Chips'" not in html
    assert " &lt;1&gt;" in html
    assert 'href="https://example.org/?a=1&amp;b=2"' in html


def test_title_is_plain_text_without_url():
    html = card(CanonicalRecord(title="Plain"))
    assert '<h3 style="margin-top:0">Plain</h3>' in html


def test_title_links_to_url():
    html = card(CanonicalRecord(title="Linked", url="https://example.org/p"))
    assert '<a href="https://example.org/p" target="_blank" rel="noopener">Linked</a>' in html


def test_journal_line_with_tail_and_year():
    record = CanonicalRecord(title="T", journal="J. Algebra", volume="12", issue="3", pages="45-50", year="2021")
    html = card(record)
    assert "<p><strong>Journal:</strong> J. Algebra 12(3):45-50 · <strong>Year:</strong> 2021</p>" in html


def test_year_segment_omitted_when_empty():
    html = card(CanonicalRecord(title="T", journal="J. Algebra"))
    assert "<p><strong>Journal:</strong> J. Algebra</p>" in html
    assert "Year:" not in html


def test_doi_and_lookup_links():
    html = card(CanonicalRecord(title="T", doi="10.1000/x"))
    assert 'DOI: <a href="https://doi.org/10.1000%2Fx" target="_blank" rel="noopener">10.1000/x</a>' in html
    assert "MR lookup" in html
    assert "s1=10.1000%2Fx" in html


def test_no_links_without_doi():
    html = card(CanonicalRecord(title="T"))
    assert "DOI:" not in html
    assert "MR lookup" not in html


def test_provider_link_follows_doi_links():
    record = CanonicalRecord(title="T", doi="10.1000/x", provider_id="1234.14001")
    html = card(record, provider_link=lambda r: ("zbMATH", f"https://zbmath.org/?q=an:{r.provider_id}"))
    assert html.index("MR lookup") < html.index("zbMATH")
    assert 'href="https://zbmath.org/?q=an:1234.14001"' in html


def test_lookup_url():
    assert lookup_url("", MR_LOOKUP_URL) == ""
    assert lookup_url("10.1/a", "https://x.org/?doi={doi}") == "https://x.org/?doi=10.1%2Fa"


def test_no_records_message():
    body = render_cards([], source_label="Crossref", lookup_template=MR_LOOKUP_URL)
    assert body == "<p>No records found via Crossref.</p>"


def test_cards_in_given_order():
    records = [CanonicalRecord(title="First"), CanonicalRecord(title="Second")]
    body = render_cards(records, source_label="Crossref", lookup_template=MR_LOOKUP_URL)
    assert body.count('<div class="card">') == 2
    assert body.index("First") < body.index("Second")
