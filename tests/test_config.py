"""
Tests for configuration loading
"""
import os
from unittest.mock import patch

import pytest

from src.utils.config import AppConfig, QueryConfig, load_config


class TestLoadConfig:
    """Tests for load_config function"""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        """Test defaults when nothing is set"""
        config = load_config()

        assert config == AppConfig(query=QueryConfig(relation_separator=".", default_size=10), timezone="Asia/Tokyo")

    @patch.dict(
        os.environ,
        {"QUERY_RELATION_SEPARATOR": "__", "QUERY_DEFAULT_SIZE": "50", "TIMEZONE": "UTC"},
        clear=True,
    )
    def test_from_environment(self):
        """Test values are read from environment variables"""
        config = load_config()

        assert config.query.relation_separator == "__"
        assert config.query.default_size == 50
        assert config.timezone == "UTC"

    @patch.dict(os.environ, {"QUERY_RELATION_SEPARATOR": ""}, clear=True)
    def test_empty_separator(self):
        """Test an empty separator is rejected"""
        with pytest.raises(ValueError, match="QUERY_RELATION_SEPARATOR"):
            load_config()

    @pytest.mark.parametrize("size", ["ten", "-1"])
    def test_invalid_default_size(self, size):
        """Test a non-integer or negative size is rejected"""
        with patch.dict(os.environ, {"QUERY_DEFAULT_SIZE": size}, clear=True):
            with pytest.raises(ValueError, match="QUERY_DEFAULT_SIZE"):
                load_config()

    @patch.dict(os.environ, {"TIMEZONE": "Mars/Olympus_Mons"}, clear=True)
    def test_unknown_timezone(self):
        """Test an unknown timezone is rejected with ValueError"""
        with pytest.raises(ValueError, match="TIMEZONE"):
            load_config()
