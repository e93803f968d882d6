"""Canonical publication record and the field helpers shared by the adapters.

Raw provider records are loosely typed: any key may be missing, hold a list
where a string is expected, or be null. Everything here tolerates that and
falls back to an empty string, so a single odd record can only ever render
with blank fields.
"""

from __future__ import annotations

import re
import urllib.parse
from dataclasses import dataclass
from typing import Any

UNTITLED = "(untitled)"

_YEAR_RUN = re.compile(r"\d{4}")


@dataclass(frozen=True)
class CanonicalRecord:
    title: str = UNTITLED
    authors: tuple[str, ...] = ()
    year: str = ""
    journal: str = ""
    volume: str = ""
    issue: str = ""
    pages: str = ""
    doi: str = ""
    url: str = ""
    provider_id: str = ""


def dig(obj: Any, *path: str | int) -> Any:
    """Walk dict keys / list indexes, returning None as soon as a step is missing."""
    for step in path:
        if isinstance(step, int):
            if not isinstance(obj, list) or not -len(obj) <= step < len(obj):
                return None
            obj = obj[step]
        else:
            if not isinstance(obj, dict):
                return None
            obj = obj.get(step)
    return obj


def first_text(value: Any) -> str:
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or isinstance(value, (dict, list, bool)):
        return ""
    return str(value).strip()


def first_of(raw: dict, *paths: tuple[str | int, ...] | str) -> str:
    """First non-empty text among several candidate locations in ``raw``."""
    for path in paths:
        if isinstance(path, str):
            path = (path,)
        text = first_text(dig(raw, *path))
        if text:
            return text
    return ""


def extract_year(*candidates: Any) -> str:
    # A direct numeric year wins over anything that has to be scraped from a date.
    for c in candidates:
        if isinstance(c, bool):
            continue
        if isinstance(c, int):
            return str(c)
        if isinstance(c, str) and re.fullmatch(r"\d{4}", c.strip()):
            return c.strip()
    for c in candidates:
        if isinstance(c, str):
            m = _YEAR_RUN.search(c)
            if m:
                return m.group(0)
    return ""


def display_name(given: Any, family: Any) -> str:
    parts = [first_text(given), first_text(family)]
    return " ".join(p for p in parts if p)


def split_name(name: str) -> tuple[str, str]:
    """``"Family, Given"`` -> ``("Given", "Family")``; no comma means family only."""
    if "," in name:
        family, given = (x.strip() for x in name.split(",", 1))
        return given, family
    return "", name.strip()


def citation_tail(volume: str, issue: str, pages: str) -> str:
    tail = ""
    if volume:
        tail += f" {volume}"
    if issue:
        tail += f"({issue})"
    if pages:
        tail += f":{pages}"
    return tail


def doi_url(doi: str) -> str:
    if not doi:
        return ""
    # Same character set as JavaScript's encodeURIComponent: "/" is escaped too.
    return "https://doi.org/" + urllib.parse.quote(doi, safe="!*'()")


def resolve_url(explicit: str, doi: str, provider_url: str = "") -> str:
    return explicit or doi_url(doi) or provider_url or ""


def clean_doi(doi: str) -> str:
    doi = doi.strip().strip('"').strip()
    for prefix in ("https://doi.org/", "http://doi.org/", "https://dx.doi.org/", "doi:"):
        if doi.lower().startswith(prefix):
            doi = doi[len(prefix):]
    if doi.lower() == "none":
        return ""
    return doi
