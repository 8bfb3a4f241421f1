"""
Robot credentials: where to send and how to sign.

Sources:
- direct construction: Credentials(access_token=..., sec_token=...)
- JSON text / JSON file ({"default_webhook_url", "access_token", "sec_token"})
- application settings (env / .env)
"""

import json
from pathlib import Path
from urllib.parse import urlsplit

from pydantic import BaseModel, Field

from dingtalk_robot.config import DEFAULT_WEBHOOK_BASE, Settings
from dingtalk_robot.errors import ConfigError

# config file key -> Credentials field
_FILE_KEYS = {
    "default_webhook_url": "webhook_base",
    "access_token": "access_token",
    "sec_token": "sec_token",
}


def expand_home(path: str) -> Path:
    """Expand a leading ``~/`` to the user's home directory."""
    if path.startswith("~/"):
        return Path.home() / path[2:]
    return Path(path)


class Credentials(BaseModel):
    model_config = {"frozen": True}

    webhook_base: str = DEFAULT_WEBHOOK_BASE
    access_token: str = Field(default="", repr=False)
    sec_token: str = Field(default="", repr=False)  # Empty means unsigned
    direct_url: str = Field(default="", repr=False)

    @property
    def is_signed(self) -> bool:
        return bool(self.sec_token) and not self.direct_url

    @classmethod
    def from_json(cls, text: str) -> "Credentials":
        """Build credentials from a JSON config document.

        Absent or null keys fall back to defaults; non-string values are rejected.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON config: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"JSON config must be an object, got {type(data).__name__}")

        fields = {}
        for key, field_name in _FILE_KEYS.items():
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ConfigError(f"Config key {key!r} must be a string")
            fields[field_name] = value
        return cls(**fields)

    @classmethod
    def from_file(cls, path: str) -> "Credentials":
        """Read credentials from a JSON file; ``~/`` is expanded first."""
        file_path = expand_home(path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read config file {file_path}: {e}") from e
        return cls.from_json(text)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Credentials":
        if settings.DINGTALK_CONFIG_FILE:
            credentials = cls.from_file(settings.DINGTALK_CONFIG_FILE)
            if settings.DINGTALK_DIRECT_URL:
                credentials = credentials.with_direct_url(settings.DINGTALK_DIRECT_URL)
            return credentials
        return cls(
            webhook_base=settings.DINGTALK_WEBHOOK_BASE,
            access_token=settings.DINGTALK_ACCESS_TOKEN,
            sec_token=settings.DINGTALK_SEC_TOKEN,
            direct_url=settings.DINGTALK_DIRECT_URL,
        )

    def with_token(self, access_token: str, sec_token: str | None = None) -> "Credentials":
        """Same base, different robot; keeps this secret unless ``sec_token`` is given."""
        update = {"access_token": access_token, "direct_url": ""}
        if sec_token is not None:
            update["sec_token"] = sec_token
        return self.model_copy(update=update)

    def with_direct_url(self, direct_url: str) -> "Credentials":
        """Use ``direct_url`` verbatim.

        Raises:
            ConfigError: not an absolute URL.
        """
        try:
            parts = urlsplit(direct_url)
        except ValueError as e:
            raise ConfigError(f"Invalid direct URL: {e}") from e
        if not parts.scheme or not parts.netloc:
            raise ConfigError("Invalid direct URL: scheme and host are required")
        return self.model_copy(update={"direct_url": direct_url})
