"""zbMATH Open document search.

The API has answered with more than one envelope over time, so the result list
is looked up under several top-level keys in a fixed order. A payload with none
of them counts as zero results rather than an error. Document fields are
probed the same way.
"""

from __future__ import annotations

import logging
from typing import Any

from papers_page.authors import name_matches, orcid_matches, text_matches
from papers_page.config import ZBMATH_DOCUMENT_URL, AuthorIdentity, SiteConfig
from papers_page.errors import SourceMalformed
from papers_page.records import (
    UNTITLED,
    CanonicalRecord,
    clean_doi,
    dig,
    display_name,
    extract_year,
    first_of,
    first_text,
    resolve_url,
    split_name,
)
from papers_page.source import Source, by_year_desc

logger = logging.getLogger(__name__)

RESULT_KEYS = ("result", "results", "documents", "data", "items")


def find_results(data: dict) -> list[dict]:
    for key in RESULT_KEYS:
        value = data.get(key)
        if isinstance(value, list):
            return [d for d in value if isinstance(d, dict)]
    logger.info("zbMATH payload has none of %s; treating as no results", ", ".join(RESULT_KEYS))
    return []


def _author_entries(raw: dict) -> list[Any]:
    for path in (("contributors", "authors"), ("authors",), ("author",)):
        value = dig(raw, *path)
        if isinstance(value, list):
            return value
        if isinstance(value, str) and value:
            return [value]
    return []


def _given_family(entry: Any) -> tuple[str, str]:
    if isinstance(entry, dict):
        if entry.get("family") or entry.get("given"):
            return first_text(entry.get("given")), first_text(entry.get("family"))
        return split_name(first_text(entry.get("name")))
    if isinstance(entry, str):
        return split_name(entry)
    return "", ""


def _raw_name(entry: Any) -> str:
    if isinstance(entry, dict):
        return first_text(entry.get("name")) or display_name(entry.get("given"), entry.get("family"))
    return first_text(entry)


def _doi(raw: dict) -> str:
    doi = first_of(raw, "doi", "DOI")
    if doi:
        return clean_doi(doi)
    links = raw.get("links")
    if isinstance(links, list):
        for link in links:
            if isinstance(link, dict) and first_text(link.get("type")).lower() == "doi":
                return clean_doi(first_text(link.get("identifier") or link.get("url")))
    return ""


class ZbmathSource(Source):
    name = "zbmath"

    def fetch_records(self, config: SiteConfig) -> list[dict]:
        ident = config.identity
        params = {
            "search_string": f"au:{ident.family}, {ident.given}",
            "results_per_page": config.rows,
            "sort": "year:desc",
        }
        data = self._get_json(config, config.zbmath_url, params)
        if not isinstance(data, dict):
            raise SourceMalformed(self.name, "payload is not a JSON object")

        docs = find_results(data)
        logger.info("zbMATH returned %d documents", len(docs))
        return docs

    def matches_author(self, raw: dict, identity: AuthorIdentity) -> bool:
        # zbMATH usually abbreviates given names ("Laface, A."), so the raw name
        # is also checked against the match text. With the default match text
        # (the family name) every author of that surname is kept; set
        # --match-text "Laface, A" to narrow it. The given/family check still
        # catches unabbreviated names the narrower text would miss.
        for entry in _author_entries(raw):
            if isinstance(entry, dict) and orcid_matches(first_text(entry.get("orcid")), identity):
                return True
            given, family = _given_family(entry)
            if name_matches(given, family, identity) or text_matches(_raw_name(entry), identity):
                return True
        return False

    def to_canonical(self, raw: dict) -> CanonicalRecord:
        names = [display_name(*_given_family(e)) for e in _author_entries(raw)]
        doi = _doi(raw)
        provider_id = first_of(raw, "identifier", "zbl_id", "an")
        return CanonicalRecord(
            title=first_of(raw, ("title", "title"), "title") or UNTITLED,
            authors=tuple(n for n in names if n),
            year=extract_year(raw.get("year"), first_text(raw.get("publication_date"))),
            journal=first_of(
                raw,
                ("journal", "title"),
                "journal_title",
                "journal",
                ("source", "series", 0, "title"),
            ),
            volume=first_of(raw, "volume", ("source", "series", 0, "volume")),
            issue=first_of(raw, "issue", ("source", "series", 0, "issue")),
            pages=first_of(raw, "pages", ("source", "pages")),
            doi=doi,
            url=resolve_url(
                first_of(raw, "url"),
                doi,
                ZBMATH_DOCUMENT_URL.format(id=provider_id) if provider_id else "",
            ),
            provider_id=provider_id,
        )

    def order(self, records: list[CanonicalRecord]) -> list[CanonicalRecord]:
        return by_year_desc(records)

    def provider_link(self, record: CanonicalRecord) -> tuple[str, str] | None:
        if not record.provider_id:
            return None
        return "zbMATH", ZBMATH_DOCUMENT_URL.format(id=record.provider_id)
