"""HTML cards for canonical records.

Titles, names and venues come from third-party metadata, so every field goes
through ``html.escape`` (quotes included) right before interpolation.
"""

from __future__ import annotations

import html
import urllib.parse
from typing import Callable, Iterable

from papers_page.records import CanonicalRecord, citation_tail, doi_url

ProviderLink = Callable[[CanonicalRecord], tuple[str, str] | None]


def _esc(s: str) -> str:
    return html.escape(s, quote=True)


def _link(url: str, text: str) -> str:
    return f'<a href="{_esc(url)}" target="_blank" rel="noopener">{text}</a>'


def lookup_url(doi: str, template: str) -> str:
    if not doi:
        return ""
    return template.format(doi=urllib.parse.quote(doi, safe="!*'()"))


def render_card(
    record: CanonicalRecord,
    *,
    lookup_template: str,
    provider_link: ProviderLink | None = None,
) -> str:
    title = _esc(record.title)
    heading = _link(record.url, title) if record.url else title

    journal = _esc(record.journal + citation_tail(record.volume, record.issue, record.pages))
    if record.year:
        journal += f" · <strong>Year:</strong> {_esc(record.year)}"

    links: list[str] = []
    if record.doi:
        links.append(f"DOI: {_link(doi_url(record.doi), _esc(record.doi))}")
        links.append(_link(lookup_url(record.doi, lookup_template), "MR lookup"))
    extra = provider_link(record) if provider_link else None
    if extra:
        label, url = extra
        links.append(_link(url, _esc(label)))

    parts: list[str] = []
    parts.append('      <div class="card">')
    parts.append(f'        <h3 style="margin-top:0">{heading}</h3>')
    parts.append(f'        <p><strong>Authors:</strong> {", ".join(_esc(a) for a in record.authors)}</p>')
    parts.append(f"        <p><strong>Journal:</strong> {journal}</p>")
    parts.append("        <p>")
    if links:
        parts.append("          " + " · ".join(links))
    parts.append("        </p>")
    parts.append("      </div>")
    return "\n".join(parts)


def no_records(source_label: str) -> str:
    return f"<p>No records found via {_esc(source_label)}.</p>"


def render_cards(
    records: Iterable[CanonicalRecord],
    *,
    source_label: str,
    lookup_template: str,
    provider_link: ProviderLink | None = None,
) -> str:
    cards = [
        render_card(r, lookup_template=lookup_template, provider_link=provider_link)
        for r in records
    ]
    if not cards:
        return no_records(source_label)
    return "\n" + "\n".join(cards) + "\n"
