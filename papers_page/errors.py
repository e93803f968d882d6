"""Failures raised by source adapters.

All of them end in the fallback page; none of them fail the build.
"""

from __future__ import annotations


class SourceError(Exception):
    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class SourceUnavailable(SourceError):
    """Transport or HTTP failure."""


class SourceMalformed(SourceError):
    """Payload or file that cannot be parsed into records."""


class SourceMissing(SourceError):
    """Expected local input is absent."""
