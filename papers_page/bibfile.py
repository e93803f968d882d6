"""Publications read from a local BibTeX file."""

from __future__ import annotations

import logging

from papers_page.authors import text_matches
from papers_page.bibparse import parse_entries
from papers_page.config import AuthorIdentity, SiteConfig
from papers_page.errors import SourceMalformed, SourceMissing, SourceUnavailable
from papers_page.records import (
    UNTITLED,
    CanonicalRecord,
    clean_doi,
    extract_year,
    first_of,
    resolve_url,
)
from papers_page.source import Source, by_year_desc

logger = logging.getLogger(__name__)


class BibFileSource(Source):
    name = "bibtex"

    def fetch_records(self, config: SiteConfig) -> list[dict]:
        try:
            with open(config.bib_path, "r", encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError as exc:
            raise SourceMissing(self.name, f"{config.bib_path} does not exist") from exc
        except OSError as exc:
            raise SourceUnavailable(self.name, f"cannot read {config.bib_path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise SourceMalformed(self.name, f"{config.bib_path} is not UTF-8: {exc}") from exc

        entries = parse_entries(text)
        logger.info("Read %d entries from %s", len(entries), config.bib_path)
        return entries

    def matches_author(self, raw: dict, identity: AuthorIdentity) -> bool:
        return text_matches(raw.get("author", ""), identity)

    def to_canonical(self, raw: dict) -> CanonicalRecord:
        # The author field is shown as written in the file.
        author = first_of(raw, "author")
        doi = clean_doi(first_of(raw, "doi"))
        return CanonicalRecord(
            title=first_of(raw, "title") or UNTITLED,
            authors=(author,) if author else (),
            year=extract_year(raw.get("year"), raw.get("date")),
            journal=first_of(raw, "journal", "booktitle"),
            volume=first_of(raw, "volume"),
            issue=first_of(raw, "number", "issue"),
            pages=first_of(raw, "pages"),
            doi=doi,
            url=resolve_url(first_of(raw, "url"), doi),
        )

    def order(self, records: list[CanonicalRecord]) -> list[CanonicalRecord]:
        return by_year_desc(records)
