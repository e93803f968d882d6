"""Decide whether a record belongs to the configured author.

Registry searches by author name are fuzzy and return plenty of namesakes and
co-author hits, so every adapter runs its records through one of these checks
before anything is rendered.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable

from papers_page.config import AuthorIdentity

logger = logging.getLogger(__name__)

_ORCID_PREFIX = re.compile(r"^https?://(www\.)?orcid\.org/", flags=re.I)


def bare_orcid(value: str) -> str:
    return _ORCID_PREFIX.sub("", (value or "").strip())


def orcid_matches(value: str, identity: AuthorIdentity) -> bool:
    if not value or not identity.orcid:
        return False
    return bare_orcid(value) == bare_orcid(identity.orcid)


def name_matches(given: str, family: str, identity: AuthorIdentity) -> bool:
    return (
        (given or "").strip().casefold() == identity.given.strip().casefold()
        and (family or "").strip().casefold() == identity.family.strip().casefold()
    )


def text_matches(text: str, identity: AuthorIdentity) -> bool:
    needle = identity.needle
    return bool(needle) and needle in (text or "").casefold()


def filter_records(
    records: Iterable[dict],
    identity: AuthorIdentity,
    matcher: Callable[[dict, AuthorIdentity], bool],
) -> list[dict]:
    kept: list[dict] = []
    for raw in records:
        if matcher(raw, identity):
            kept.append(raw)
        else:
            logger.debug("Dropping record not attributed to %s: %r", identity.full_name, raw.get("title"))
    return kept
