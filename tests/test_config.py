"""Tests for settings resolution."""

import pytest

from leano.config import POLL_MAX, POLL_MIN, Settings, normalize_url


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.base_url == "http://192.168.0.1"
        assert settings.username == "admin"
        assert settings.password is None
        assert settings.poll_interval == 3.0
        assert settings.auth_timeout == 10
        assert settings.command_timeout == 30
        assert settings.dmz_ip == "192.168.0.98"

    def test_env_overrides(self):
        settings = Settings.from_env({
            "LEANO_URL": "10.0.0.1/",
            "LEANO_USERNAME": "root",
            "LEANO_PASSWORD": "pw",
            "LEANO_POLL_INTERVAL": "5",
            "LEANO_DMZ_IP": "10.0.0.9",
        })
        assert settings.base_url == "http://10.0.0.1"
        assert settings.username == "root"
        assert settings.password == "pw"
        assert settings.poll_interval == 5.0
        assert settings.dmz_ip == "10.0.0.9"

    def test_blank_env_values_ignored(self):
        assert Settings.from_env({"LEANO_USERNAME": "  "}).username == "admin"

    @pytest.mark.parametrize("raw", ["fast", "0", "-4"])
    def test_invalid_numbers_keep_default(self, raw, caplog):
        settings = Settings.from_env({"LEANO_COMMAND_TIMEOUT": raw})
        assert settings.command_timeout == 30
        assert "LEANO_COMMAND_TIMEOUT" in caplog.text

    def test_interval_clamped(self):
        assert Settings.from_env({"LEANO_POLL_INTERVAL": "0.1"}).poll_interval == POLL_MIN
        assert Settings.from_env({"LEANO_POLL_INTERVAL": "999"}).poll_interval == POLL_MAX

    def test_override_skips_none(self):
        settings = Settings(username="root").override(username=None, base_url="https://r:8080/")
        assert settings.username == "root"
        assert settings.base_url == "https://r:8080"

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Settings().username = "x"


@pytest.mark.parametrize("url, expected", [
    ("192.168.0.1", "http://192.168.0.1"),
    ("http://192.168.0.1/", "http://192.168.0.1"),
    (" https://router ", "https://router"),
])
def test_normalize_url(url, expected):
    assert normalize_url(url) == expected
