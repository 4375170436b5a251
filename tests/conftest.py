"""
Test configuration and fixtures.
"""

from datetime import datetime

import pytest
import pytz

from src.es_client.query import MatchQuery, TermQuery


@pytest.fixture
def sample_date():
    return pytz.utc.localize(datetime(2024, 1, 1))


@pytest.fixture
def age_term():
    return TermQuery("age", 5)


@pytest.fixture
def title_match():
    return MatchQuery("title", "golang")


@pytest.fixture
def default_separator(monkeypatch):
    """Use the built-in "." relation separator whatever the environment says"""
    monkeypatch.setattr("src.es_client.bool_query.config", None)
