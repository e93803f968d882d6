"""Small tolerant BibTeX reader.

Hand-maintained .bib files tend to have the odd missing brace or key, so this
reads what it can instead of rejecting the file:

- an entry without a closing brace is skipped (with a warning) and scanning
  resumes right after its ``@type{`` head, so the entries that follow it are
  still read;
- a closed entry without a citation key is skipped as a whole (with a
  warning);
- inside a closed entry, fields are read until the field list stops making
  sense, and whatever was read so far is kept.

Values may be ``{braced}`` (nested braces are kept verbatim), ``"quoted"`` or
a bare token up to the next comma. Field names are lower-cased; the entry type
and key are stored under ``ENTRYTYPE`` and ``ID``.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_ENTRY_HEAD = re.compile(r"@\s*([A-Za-z]+)\s*\{")
_FIELD_NAME = re.compile(r"[\s,]*([A-Za-z][\w\-:.]*)\s*=\s*")
_SPACES = re.compile(r"\s+")
_SKIPPED_TYPES = {"comment", "preamble", "string"}


def _collapse(value: str) -> str:
    return _SPACES.sub(" ", value).strip()


def _closing_brace(text: str, start: int) -> int:
    """Index of the brace closing the one at ``text[start]``, or -1."""
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _closing_quote(text: str, start: int) -> int:
    depth = 0
    for i in range(start + 1, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch == '"' and depth <= 0 and text[i - 1] != "\\":
            return i
    return -1


def _read_value(body: str, i: int) -> tuple[str, int] | None:
    if i >= len(body):
        return None
    ch = body[i]
    if ch == "{":
        end = _closing_brace(body, i)
        if end < 0:
            return None
        return body[i + 1:end], end + 1
    if ch == '"':
        end = _closing_quote(body, i)
        if end < 0:
            return None
        return body[i + 1:end], end + 1
    end = body.find(",", i)
    if end < 0:
        end = len(body)
    return body[i:end], end


def parse_fields(body: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    i = 0
    while i < len(body):
        m = _FIELD_NAME.match(body, i)
        if not m:
            if body[i:].strip(" \t\r\n,"):
                logger.debug("Stopped reading fields at %r", body[i:i + 40])
            break
        read = _read_value(body, m.end())
        if read is None:
            logger.debug("Unterminated value for field %r", m.group(1))
            break
        value, i = read
        fields[m.group(1).lower()] = _collapse(value)
    return fields


def parse_entries(text: str) -> list[dict]:
    entries: list[dict] = []
    pos = 0
    while True:
        head = _ENTRY_HEAD.search(text, pos)
        if not head:
            break
        entry_type = head.group(1).lower()
        open_at = head.end() - 1
        close_at = _closing_brace(text, open_at)
        if close_at < 0:
            logger.warning("Skipping @%s entry without a closing brace near offset %d", entry_type, head.start())
            pos = head.end()
            continue
        pos = close_at + 1
        if entry_type in _SKIPPED_TYPES:
            continue

        body = text[open_at + 1:close_at]
        key, sep, rest = body.partition(",")
        key = key.strip()
        if not sep or not key or "=" in key or "{" in key:
            logger.warning("Skipping @%s entry without a citation key near offset %d", entry_type, head.start())
            continue

        entry = parse_fields(rest)
        entry["ENTRYTYPE"] = entry_type
        entry["ID"] = key
        entries.append(entry)
    return entries
