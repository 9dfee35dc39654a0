"""Configuration management for Mastodon Feed."""

import os
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9000
DEFAULT_TIMEOUT = 10.0


@dataclass
class MastodonConfig:
    """Configuration for the origin Mastodon instance."""

    instance_url: str
    access_token: str
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    home_instance: str = ""


class Config:
    """Main configuration manager."""

    # Hints shown when a required variable is missing
    REQUIRED_VARIABLES = {
        "MASTODON_INSTANCE": "Your Mastodon server (e.g. https://fosstodon.org)",
        "MASTODON_TOKEN": "Your Mastodon access token",
    }

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.instance_url = normalize_instance_url(os.getenv("MASTODON_INSTANCE", ""))
        self.access_token = os.getenv("MASTODON_TOKEN", "").strip()
        self.home_instance = normalize_home_instance(os.getenv("HOME_INSTANCE", ""))
        self.host = os.getenv("HOST", DEFAULT_HOST)
        self.port = os.getenv("PORT", str(DEFAULT_PORT))
        self.request_timeout = os.getenv("REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT))
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    def validate(self) -> None:
        """Check that every required value is present and well formed.

        Raises:
            ConfigError: If a required variable is missing or a numeric
                option cannot be parsed
        """
        present = {
            "MASTODON_INSTANCE": self.instance_url,
            "MASTODON_TOKEN": self.access_token,
        }
        missing = [name for name, value in present.items() if not value]
        if missing:
            lines = [
                f"  {name} - {self.REQUIRED_VARIABLES[name]}" for name in missing
            ]
            raise ConfigError(
                "Required environment variables:\n" + "\n".join(lines)
            )

        self._parse_port()
        self._parse_timeout()

    def get_mastodon_config(self) -> MastodonConfig:
        """Get origin instance configuration."""
        self.validate()
        return MastodonConfig(
            instance_url=self.instance_url,
            access_token=self.access_token,
            timeout=self._parse_timeout(),
        )

    def get_server_config(self) -> ServerConfig:
        """Get HTTP server configuration."""
        return ServerConfig(
            host=self.host,
            port=self._parse_port(),
            home_instance=self.home_instance,
        )

    def _parse_port(self) -> int:
        try:
            port = int(self.port)
        except (TypeError, ValueError):
            raise ConfigError(f"PORT must be an integer, got {self.port!r}")
        if not 0 < port < 65536:
            raise ConfigError(f"PORT out of range: {port}")
        return port

    def _parse_timeout(self) -> float:
        try:
            timeout = float(self.request_timeout)
        except (TypeError, ValueError):
            raise ConfigError(
                f"REQUEST_TIMEOUT must be a number, got {self.request_timeout!r}"
            )
        if timeout <= 0:
            raise ConfigError(f"REQUEST_TIMEOUT must be positive, got {timeout}")
        return timeout


def normalize_instance_url(value: str) -> str:
    """Return the origin base URL with a scheme and no trailing slash."""
    value = value.strip().rstrip("/")
    if value and "://" not in value:
        value = f"https://{value}"
    return value


def normalize_home_instance(value: str) -> str:
    """Return the bare host label of the home instance."""
    value = value.strip().rstrip("/")
    if "://" in value:
        value = value.split("://", 1)[1]
    return value
