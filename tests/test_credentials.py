"""Tests for credentials loading (JSON text, files, settings)."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from dingtalk_robot.config import DEFAULT_WEBHOOK_BASE, Settings
from dingtalk_robot.core.credentials import Credentials, expand_home
from dingtalk_robot.errors import ConfigError


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "dingtalk.json"
    path.write_text(
        json.dumps(
            {
                "default_webhook_url": "http://localhost/send?access_token=",
                "access_token": "tok",
                "sec_token": "sec",
            }
        )
    )
    return path


# =============================================================================
# from_json
# =============================================================================


class TestFromJson:
    def test_all_fields(self):
        creds = Credentials.from_json(
            '{"default_webhook_url": "http://b/", "access_token": "t", "sec_token": "s"}'
        )
        assert creds.webhook_base == "http://b/"
        assert creds.access_token == "t"
        assert creds.sec_token == "s"
        assert creds.direct_url == ""

    def test_optional_fields_default(self):
        creds = Credentials.from_json('{"access_token": "t"}')
        assert creds.webhook_base == DEFAULT_WEBHOOK_BASE
        assert creds.sec_token == ""
        assert creds.is_signed is False

    def test_null_treated_as_absent(self):
        creds = Credentials.from_json('{"access_token": "t", "sec_token": null}')
        assert creds.sec_token == ""

    def test_unknown_keys_ignored(self):
        assert Credentials.from_json('{"access_token": "t", "comment": 1}').access_token == "t"

    def test_invalid_json(self):
        with pytest.raises(ConfigError, match="Invalid JSON"):
            Credentials.from_json("{not json")

    @pytest.mark.parametrize("text", ["[]", '"token"', "42", "null"])
    def test_non_object_rejected(self, text):
        with pytest.raises(ConfigError, match="must be an object"):
            Credentials.from_json(text)

    def test_non_string_value_rejected(self):
        with pytest.raises(ConfigError, match="access_token"):
            Credentials.from_json('{"access_token": 123}')


# =============================================================================
# from_file
# =============================================================================


class TestFromFile:
    def test_reads_file(self, config_file):
        creds = Credentials.from_file(str(config_file))
        assert creds.access_token == "tok"
        assert creds.sec_token == "sec"
        assert creds.webhook_base == "http://localhost/send?access_token="

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config file"):
            Credentials.from_file(str(tmp_path / "nope.json"))

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(ConfigError):
            Credentials.from_file(str(tmp_path))

    def test_home_expansion(self, tmp_path, config_file):
        with patch.object(Path, "home", return_value=tmp_path):
            creds = Credentials.from_file("~/dingtalk.json")
        assert creds.access_token == "tok"

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            Credentials.from_file(str(path))


class TestExpandHome:
    def test_leading_tilde_slash(self, tmp_path):
        with patch.object(Path, "home", return_value=tmp_path):
            assert expand_home("~/a/b.json") == tmp_path / "a" / "b.json"

    def test_other_paths_untouched(self):
        assert expand_home("/etc/dingtalk.json") == Path("/etc/dingtalk.json")
        assert expand_home("~user/x.json") == Path("~user/x.json")


# =============================================================================
# from_settings / value semantics
# =============================================================================


class TestFromSettings:
    def test_env_fields(self):
        s = Settings(
            DINGTALK_ACCESS_TOKEN="t",
            DINGTALK_SEC_TOKEN="s",
            DINGTALK_DIRECT_URL="",
            DINGTALK_CONFIG_FILE="",
        )
        creds = Credentials.from_settings(s)
        assert creds.access_token == "t"
        assert creds.sec_token == "s"
        assert creds.webhook_base == DEFAULT_WEBHOOK_BASE

    def test_config_file_wins(self, config_file):
        s = Settings(DINGTALK_ACCESS_TOKEN="env", DINGTALK_CONFIG_FILE=str(config_file))
        assert Credentials.from_settings(s).access_token == "tok"

    def test_broken_config_file_raises(self, tmp_path):
        s = Settings(DINGTALK_CONFIG_FILE=str(tmp_path / "missing.json"))
        with pytest.raises(ConfigError):
            Credentials.from_settings(s)

    def test_env_direct_url_overrides_config_file(self, config_file):
        s = Settings(
            DINGTALK_CONFIG_FILE=str(config_file),
            DINGTALK_DIRECT_URL="https://example.com/hook?session=1",
            DINGTALK_WEBHOOK_BASE="http://env-base/",
        )
        creds = Credentials.from_settings(s)
        assert creds.direct_url == "https://example.com/hook?session=1"
        # base, token and secret come only from the file
        assert creds.webhook_base == "http://localhost/send?access_token="
        assert creds.access_token == "tok"


class TestCredentialsValue:
    def test_frozen(self):
        creds = Credentials(access_token="t")
        with pytest.raises(ValidationError):
            creds.access_token = "other"

    def test_repr_hides_secrets(self):
        text = repr(Credentials(access_token="tok-123", sec_token="sec-456", direct_url="http://x?t=1"))
        assert "tok-123" not in text
        assert "sec-456" not in text
        assert "t=1" not in text

    def test_with_token_clears_direct_url(self):
        creds = Credentials(access_token="a", sec_token="s", direct_url="http://d")
        other = creds.with_token("b")
        assert other.access_token == "b"
        assert other.sec_token == "s"
        assert other.direct_url == ""
        assert creds.access_token == "a"

    def test_direct_url_disables_signing(self):
        assert Credentials(sec_token="s", direct_url="http://d").is_signed is False
        assert Credentials(sec_token="s").is_signed is True

    def test_with_token_own_secret(self):
        creds = Credentials(access_token="a", sec_token="s").with_token("b", "other")
        assert creds.access_token == "b"
        assert creds.sec_token == "other"

    def test_with_direct_url(self):
        creds = Credentials(access_token="a").with_direct_url("https://example.com/hook?x=1")
        assert creds.direct_url == "https://example.com/hook?x=1"

    @pytest.mark.parametrize("url", ["http://[bad", "not a url", "/relative/path"])
    def test_with_direct_url_rejects_malformed(self, url):
        with pytest.raises(ConfigError, match="Invalid direct URL"):
            Credentials(access_token="a").with_direct_url(url)
