"""What every data source provides, plus the HTTP plumbing the API sources share."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import requests

from papers_page.config import AuthorIdentity, SiteConfig
from papers_page.errors import SourceMalformed, SourceUnavailable
from papers_page.records import CanonicalRecord

logger = logging.getLogger(__name__)


def _session(config: SiteConfig) -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": config.user_agent, "Accept": "application/json"})
    return s


def _year_key(record: CanonicalRecord) -> int:
    return int(record.year) if record.year.isdigit() else -1


def by_year_desc(records: Iterable[CanonicalRecord]) -> list[CanonicalRecord]:
    # sorted() is stable, so records of the same year keep their arrival order.
    return sorted(records, key=_year_key, reverse=True)


class Source:
    name = ""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session

    def fetch_records(self, config: SiteConfig) -> list[dict]:
        raise NotImplementedError

    def matches_author(self, raw: dict, identity: AuthorIdentity) -> bool:
        raise NotImplementedError

    def to_canonical(self, raw: dict) -> CanonicalRecord:
        raise NotImplementedError

    def order(self, records: list[CanonicalRecord]) -> list[CanonicalRecord]:
        return list(records)

    def provider_link(self, record: CanonicalRecord) -> tuple[str, str] | None:
        """(label, url) of the provider's own page for a record, when it has one."""
        return None

    def _get_json(self, config: SiteConfig, url: str, params: dict[str, Any]) -> Any:
        s = self.session or _session(config)
        logger.info("GET %s (%s)", url, self.name)
        try:
            r = s.get(url, params=params, timeout=config.timeout)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise SourceUnavailable(self.name, f"request failed: {exc}") from exc
        try:
            return r.json()
        except ValueError as exc:
            raise SourceMalformed(self.name, f"response is not JSON: {exc}") from exc
