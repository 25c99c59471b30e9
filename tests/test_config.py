"""
Configuration and token tests.

Tests environment-driven configuration loading without touching any
real .env file in the working directory.
"""

import logging
import os
from unittest.mock import patch

import pytest

from cmdopts import (
    ExistenceCondition,
    ExpireUnit,
    InfinitySentinel,
    OptionsConfig,
    OptionsConfigurationError,
    configure_logging,
    get_config,
    load_config,
    reset_config,
)


class TestOptionsConfig:
    """Test builder configuration."""

    def test_config_defaults(self):
        """Test creating config with default values."""
        config = OptionsConfig()
        assert config.fail_fast is False
        assert config.json_sort_keys is False
        assert config.json_ensure_ascii is False
        assert config.payload_encoding == "utf-8"
        assert config.log_level == "WARNING"

    def test_log_level_is_normalized(self):
        """Test log level is upper-cased."""
        assert OptionsConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValueError):
            OptionsConfig(log_level="LOUD")

    def test_payload_encoding_is_normalized(self):
        """Test codec aliases resolve to their canonical name."""
        assert OptionsConfig(payload_encoding="UTF8").payload_encoding == "utf-8"

    def test_invalid_payload_encoding(self):
        """Test unknown codecs are rejected."""
        with pytest.raises(ValueError):
            OptionsConfig(payload_encoding="not-a-codec")

    def test_config_from_env(self):
        """Test creating config from environment variables."""
        with patch.dict(os.environ, {
            "CMDOPTS_FAIL_FAST": "true",
            "CMDOPTS_JSON_SORT_KEYS": "1",
            "CMDOPTS_JSON_ENSURE_ASCII": "yes",
            "CMDOPTS_PAYLOAD_ENCODING": "latin-1",
            "CMDOPTS_LOG_LEVEL": "info",
        }):
            config = load_config(env_file="does-not-exist.env")
            assert config.fail_fast is True
            assert config.json_sort_keys is True
            assert config.json_ensure_ascii is True
            assert config.payload_encoding == "iso8859-1"
            assert config.log_level == "INFO"

    def test_config_from_env_file(self, tmp_path):
        """Test values are read from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("CMDOPTS_FAIL_FAST=on\n")
        config = load_config(env_file=str(env_file))
        assert config.fail_fast is True

    def test_invalid_env_raises_configuration_error(self):
        """Test invalid environment values raise OptionsConfigurationError."""
        with patch.dict(os.environ, {"CMDOPTS_LOG_LEVEL": "chatty"}):
            with pytest.raises(OptionsConfigurationError):
                load_config(env_file="does-not-exist.env")

    def test_get_config_is_cached(self):
        """Test the global config is loaded once until reset."""
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first

    def test_configure_logging(self):
        """Test the package logger picks up the configured level."""
        configure_logging(OptionsConfig(log_level="ERROR"))
        assert logging.getLogger("cmdopts").level == logging.ERROR
        configure_logging(OptionsConfig())
        assert logging.getLogger("cmdopts").level == logging.WARNING


class TestTokens:
    """Test literal token values."""

    def test_expire_units(self):
        assert ExpireUnit.SECONDS == "EX"
        assert ExpireUnit.MILLISECONDS == "PX"

    def test_existence_conditions(self):
        assert ExistenceCondition.EXIST == "XX"
        assert ExistenceCondition.NOT_EXIST == "NX"

    def test_infinity_sentinels(self):
        assert InfinitySentinel.MIN == "-inf"
        assert InfinitySentinel.MAX == "+inf"
