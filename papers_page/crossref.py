"""Crossref works search, filtered down to the configured author.

The request asks Crossref itself to sort by issue date, newest first, so the
records are rendered in the order they arrive.
"""

from __future__ import annotations

import logging

from papers_page.authors import name_matches, orcid_matches
from papers_page.config import CROSSREF_SELECT, AuthorIdentity, SiteConfig
from papers_page.errors import SourceMalformed
from papers_page.records import (
    UNTITLED,
    CanonicalRecord,
    dig,
    display_name,
    extract_year,
    first_of,
    first_text,
    resolve_url,
)
from papers_page.source import Source

logger = logging.getLogger(__name__)


def _authors(raw: dict) -> list[dict]:
    authors = raw.get("author")
    if not isinstance(authors, list):
        return []
    return [a for a in authors if isinstance(a, dict)]


class CrossrefSource(Source):
    name = "crossref"

    def fetch_records(self, config: SiteConfig) -> list[dict]:
        params = {
            "query.author": config.identity.full_name,
            "rows": config.rows,
            "sort": "issued",
            "order": "desc",
            "select": CROSSREF_SELECT,
        }
        data = self._get_json(config, config.crossref_url, params)

        message = data.get("message") if isinstance(data, dict) else None
        if not isinstance(message, dict):
            raise SourceMalformed(self.name, "payload has no 'message' object")
        items = message.get("items", [])
        if not isinstance(items, list):
            raise SourceMalformed(self.name, "'message.items' is not a list")

        logger.info("Crossref returned %d items", len(items))
        return [it for it in items if isinstance(it, dict)]

    def matches_author(self, raw: dict, identity: AuthorIdentity) -> bool:
        return any(
            orcid_matches(first_text(a.get("ORCID")), identity)
            or name_matches(first_text(a.get("given")), first_text(a.get("family")), identity)
            for a in _authors(raw)
        )

    def to_canonical(self, raw: dict) -> CanonicalRecord:
        names = [display_name(a.get("given"), a.get("family")) for a in _authors(raw)]
        doi = first_text(raw.get("DOI"))
        return CanonicalRecord(
            title=first_text(raw.get("title")) or UNTITLED,
            authors=tuple(n for n in names if n),
            year=extract_year(
                dig(raw, "issued", "date-parts", 0, 0),
                first_text(dig(raw, "issued", "date-time")),
            ),
            journal=first_text(raw.get("container-title")),
            volume=first_of(raw, "volume"),
            issue=first_of(raw, "issue"),
            pages=first_of(raw, "page"),
            doi=doi,
            url=resolve_url(first_text(raw.get("URL")), doi),
        )
