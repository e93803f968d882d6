"""Page shell around the list of cards, and writing it to disk."""

from __future__ import annotations

import html
import logging
import os
import time

from papers_page.config import SiteConfig

logger = logging.getLogger(__name__)


def fallback_body(source_label: str) -> str:
    return f"<p>Failed to fetch {html.escape(source_label)} right now. Please try again later.</p>"


def build_page(body: str, config: SiteConfig) -> str:
    title = html.escape(config.site_title)
    brand = html.escape(config.identity.full_name).replace(" ", "&nbsp;", 1)
    label = html.escape(config.source_label)
    orcid = html.escape(config.identity.orcid)
    year = time.gmtime().tm_year

    return f"""<!doctype html>
<html lang="en"><head>
  <meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
  <title>Papers — {title}</title>
  <link rel="stylesheet" href="../assets/css/style.css">
</head><body>
<header><nav>
  <a class="brand" href="../">{brand}</a>
  <a href="./">Papers</a>
  <a href="../arxiv/">arXiv</a>
  <a href="../software/">Software</a>
  <a href="../notes/">Lecture notes</a>
  <a href="../book/">Book</a>
</nav></header>
<main>
  <h1>Published papers</h1>
  <p>This page is generated automatically from {label}, keeping only my own papers.</p>
  <div id="papers" class="card">
{body}
  </div>
  <p style="font-size:.95em;color:#57606a;margin-top:1rem">Data source: {label} · ORCID {orcid}</p>
</main>
<footer>© {year} {html.escape(config.identity.full_name)}</footer>
</body></html>
"""


def write_page(document: str, path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(document)
    logger.debug("Wrote %d bytes to %s", len(document), path)
