"""
Module: test_settings.py
Description: Unit tests for settings, region registry and protocol defaults.
"""

import pytest
from pydantic import ValidationError

from sqs_async.config.regions import DEFAULT_PROTOCOL, DEFAULT_REGIONS, Region, RegionRegistry
from sqs_async.config.settings import Settings
from sqs_async.errors import ConfigurationError


class TestSettings:
    """Test cases for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("SQS_ACCESS_KEY", "SQS_SECRET_KEY", "SQS_REGION", "SQS_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.region == "us_east"
        assert settings.scheme == "https"
        assert settings.timeout_seconds == 30.0
        assert settings.expires_in_seconds == 1800
        assert settings.log_level == "WARNING"
        assert settings.secret_key.get_secret_value() == ""

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SQS_ACCESS_KEY", "AKID")
        monkeypatch.setenv("SQS_SECRET_KEY", "secret")
        monkeypatch.setenv("SQS_REGION", "eu")
        monkeypatch.setenv("SQS_LOG_LEVEL", "error")

        settings = Settings(_env_file=None)

        assert settings.access_key == "AKID"
        assert settings.secret_key.get_secret_value() == "secret"
        assert str(settings.secret_key) == "**********"
        assert settings.region == "eu"
        assert settings.log_level == "ERROR"

    def test_unknown_region_rejected(self):
        with pytest.raises(ValidationError, match="region must be one of"):
            Settings(_env_file=None, region="mars")

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError, match="log_level"):
            Settings(_env_file=None, log_level="LOUD")

    def test_scheme_restricted(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, scheme="ftp")


class TestRegionRegistry:
    """Test cases for the immutable region registry."""

    def test_default_hosts(self):
        assert DEFAULT_REGIONS.host("us_east") == "sqs.us-east-1.amazonaws.com"
        assert DEFAULT_REGIONS.host("asia_tokyo") == "sqs.ap-northeast-1.amazonaws.com"
        assert len(DEFAULT_REGIONS) == 5

    def test_unknown_region(self):
        with pytest.raises(ConfigurationError, match="unknown region 'mars'"):
            DEFAULT_REGIONS.host("mars")

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_REGIONS["mars"] = Region(name="Mars", host="sqs.mars.example")

    def test_regions_are_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_REGIONS["eu"].host = "elsewhere"

    def test_custom_registry(self):
        registry = RegionRegistry({"local": Region(name="Local", host="localhost:9324")})

        assert list(registry) == ["local"]
        assert registry.host("local") == "localhost:9324"

    def test_empty_registry_rejected(self):
        with pytest.raises(ConfigurationError):
            RegionRegistry({})


class TestProtocolDefaults:
    def test_wire_params(self):
        assert DEFAULT_PROTOCOL.as_params() == {
            "Version": "2009-02-01",
            "SignatureVersion": "2",
            "SignatureMethod": "HmacSHA256",
        }
