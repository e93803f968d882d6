"""Build the "Published papers" page from Crossref, a BibTeX file or zbMATH."""

__version__ = "1.0.0"
