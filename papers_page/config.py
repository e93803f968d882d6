from __future__ import annotations

from dataclasses import dataclass, field

SOURCES = ("crossref", "bibtex", "zbmath")

SOURCE_LABELS = {
    "crossref": "Crossref",
    "bibtex": "the BibTeX file",
    "zbmath": "zbMATH",
}

CROSSREF_URL = "https://api.crossref.org/works"
CROSSREF_SELECT = "title,author,DOI,URL,issued,container-title,volume,issue,page"
ZBMATH_URL = "https://api.zbmath.org/v1/document/_search"
ZBMATH_DOCUMENT_URL = "https://zbmath.org/?q=an:{id}"
MR_LOOKUP_URL = (
    "https://mathscinet.ams.org/mathscinet/relay?mr=Lookup"
    "&url=https://mathscinet.ams.org/mathscinet/search/publications.html?pg1=DOI&s1={doi}"
)


@dataclass(frozen=True)
class AuthorIdentity:
    given: str
    family: str
    orcid: str = ""
    # Substring looked for in free-text author fields; falls back to the family name.
    match_text: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.given, self.family) if p)

    @property
    def needle(self) -> str:
        return (self.match_text or self.family).strip().casefold()


@dataclass(frozen=True)
class SiteConfig:
    identity: AuthorIdentity = field(
        default_factory=lambda: AuthorIdentity("Antonio", "Laface", "0000-0001-6926-8249")
    )
    source: str = "crossref"
    rows: int = 200
    output: str = "papers/index.html"
    bib_path: str = "papers/publications.bib"
    site_name: str = "alaface-pages"
    contact: str = "alaface@udec.cl"
    site_title: str = "A. Laface"
    timeout: float | None = None
    crossref_url: str = CROSSREF_URL
    zbmath_url: str = ZBMATH_URL
    lookup_template: str = MR_LOOKUP_URL

    @property
    def user_agent(self) -> str:
        return f"{self.site_name}/1.0 (mailto:{self.contact})"

    @property
    def source_label(self) -> str:
        return SOURCE_LABELS.get(self.source, self.source)
