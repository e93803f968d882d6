#!/usr/bin/env python3
"""Build papers/index.html from one bibliographic source.

fetch -> keep the author's records -> canonical records -> cards -> page.

Whatever goes wrong while fetching, a page is still written (with a short
"try again later" note instead of the list) and the process exits 0, so the
site deploy never breaks on a flaky upstream.
"""

from __future__ import annotations

import argparse
import logging

from papers_page.authors import filter_records
from papers_page.bibfile import BibFileSource
from papers_page.config import SOURCES, AuthorIdentity, SiteConfig
from papers_page.crossref import CrossrefSource
from papers_page.errors import SourceError
from papers_page.page import build_page, fallback_body, write_page
from papers_page.render import render_cards
from papers_page.source import Source
from papers_page.zbmath import ZbmathSource

logger = logging.getLogger(__name__)

ADAPTERS: dict[str, type[Source]] = {
    "crossref": CrossrefSource,
    "bibtex": BibFileSource,
    "zbmath": ZbmathSource,
}


def make_source(name: str) -> Source:
    try:
        return ADAPTERS[name]()
    except KeyError:
        raise ValueError(f"unknown source {name!r}; expected one of {', '.join(SOURCES)}") from None


def run(config: SiteConfig, source: Source | None = None) -> int:
    """Write the page for ``config`` and return the number of cards on it."""
    source = source or make_source(config.source)

    try:
        raw = source.fetch_records(config)
    except SourceError as exc:
        logger.error("Build failed, writing fallback page to %s: %s", config.output, exc, exc_info=exc)
        write_page(build_page(fallback_body(config.source_label), config), config.output)
        return 0

    kept = filter_records(raw, config.identity, source.matches_author)
    logger.info("Kept %d of %d records for %s", len(kept), len(raw), config.identity.full_name)

    records = source.order([source.to_canonical(r) for r in kept])
    body = render_cards(
        records,
        source_label=config.source_label,
        lookup_template=config.lookup_template,
        provider_link=source.provider_link,
    )
    write_page(build_page(body, config), config.output)
    return len(records)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = SiteConfig()
    parser = argparse.ArgumentParser(
        description="Generate the published papers page",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("-s", "--source", choices=SOURCES, default=defaults.source, help="Where to read publications from")
    parser.add_argument("-O", "--output", default=defaults.output, help="HTML file to write")
    parser.add_argument("-b", "--bib", default=defaults.bib_path, help="BibTeX file for --source bibtex")
    parser.add_argument("--author-given", default=defaults.identity.given, help="Given name of the author")
    parser.add_argument("--author-family", default=defaults.identity.family, help="Family name of the author")
    parser.add_argument("--orcid", default=defaults.identity.orcid, help="ORCID iD of the author")
    parser.add_argument(
        "--match-text",
        default="",
        help="Text looked for in free-text author fields (defaults to the family name)",
    )
    parser.add_argument("-m", "--mailto", default=defaults.contact, help="Contact address sent in the User-Agent")
    parser.add_argument("-r", "--rows", type=int, default=defaults.rows, help="Maximum number of records to request")
    parser.add_argument("-t", "--timeout", type=float, default=None, help="HTTP timeout in seconds (none by default)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> SiteConfig:
    return SiteConfig(
        identity=AuthorIdentity(
            given=args.author_given,
            family=args.author_family,
            orcid=args.orcid,
            match_text=args.match_text,
        ),
        source=args.source,
        rows=args.rows,
        output=args.output,
        bib_path=args.bib,
        contact=args.mailto,
        timeout=args.timeout,
    )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)
    config = config_from_args(args)

    count = run(config)
    print(f"Wrote {config.output} with {count} entries.")


if __name__ == "__main__":
    main()
