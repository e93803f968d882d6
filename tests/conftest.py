from unittest.mock import MagicMock

import pytest
import requests

from papers_page.config import SiteConfig


@pytest.fixture
def config(tmp_path):
    return SiteConfig(
        output=str(tmp_path / "papers" / "index.html"),
        bib_path=str(tmp_path / "publications.bib"),
    )


@pytest.fixture
def fake_session():
    """Build a stand-in for requests.Session whose get() answers with ``payload``."""

    def make(payload=None, status=200, error=None):
        response = MagicMock()
        response.status_code = status
        if isinstance(payload, Exception):
            response.json.side_effect = payload
        else:
            response.json.return_value = payload
        if status >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")

        session = MagicMock()
        if error is not None:
            session.get.side_effect = error
        else:
            session.get.return_value = response
        return session

    return make


def _crossref_item(**overrides):
    item = {
        "title": ["Cox rings of blow-ups"],
        "author": [
            {"given": "Antonio", "family": "Laface", "ORCID": "http://orcid.org/0000-0001-6926-8249"},
            {"given": "Luca", "family": "Ugaglia"},
        ],
        "DOI": "10.1000/cox.2021",
        "URL": "http://dx.doi.org/10.1000/cox.2021",
        "issued": {"date-parts": [[2021, 3, 5]]},
        "container-title": ["Journal of Algebra"],
        "volume": "12",
        "issue": "3",
        "page": "45-50",
    }
    item.update(overrides)
    return item


@pytest.fixture
def crossref_item():
    """Factory for a Crossref work by the default author; keyword arguments replace fields."""
    return _crossref_item
