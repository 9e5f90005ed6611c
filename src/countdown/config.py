"""Configuration management for Countdown."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

COUNTDOWN_HOME = Path(os.environ.get("COUNTDOWN_HOME", Path.home() / ".countdown"))
CONFIG_FILE = COUNTDOWN_HOME / "config" / "countdown.conf"

LOCAL_BASE_URL = "http://localhost:5000/todos"
COLLECTION_PATH = "/todos"


@dataclass
class Config:
    """Countdown configuration."""

    api_base_url: str = ""
    deployed: bool = False
    request_timeout: float = 10.0
    tick_interval: float = 1.0


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on", "production")


def _parse_seconds(key: str, value: str, default: float) -> float:
    try:
        seconds = float(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value: {value!r}, using {default}")
        return default
    if seconds <= 0:
        logger.warning(f"{key.upper()} must be positive, using {default}")
        return default
    return seconds


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from countdown.conf, then apply environment overrides."""
    config = Config()
    path = path or CONFIG_FILE

    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "api_base_url":
                    config.api_base_url = value
                case "deployed":
                    config.deployed = _parse_bool(value)
                case "request_timeout":
                    config.request_timeout = _parse_seconds(key, value, config.request_timeout)
                case "tick_interval":
                    config.tick_interval = _parse_seconds(key, value, config.tick_interval)
                case _:
                    logger.debug(f"Ignoring unknown config key: {key}")

    if os.environ.get("COUNTDOWN_API_BASE_URL"):
        config.api_base_url = os.environ["COUNTDOWN_API_BASE_URL"]
    if os.environ.get("COUNTDOWN_ENV"):
        config.deployed = _parse_bool(os.environ["COUNTDOWN_ENV"])

    logger.debug(
        f"Loaded config: api_base_url={config.api_base_url!r} deployed={config.deployed}"
    )
    return config


def resolve_base_url(config: Config) -> str:
    """
    Resolve the task collection URL.

    Trailing slashes are dropped and the collection path is appended when
    missing. Without a configured URL, local runs fall back to the
    development server; deployed runs raise ConfigurationError.
    """
    url = (config.api_base_url or "").strip()
    if url:
        url = url.rstrip("/")
        if not url.endswith(COLLECTION_PATH):
            url = f"{url}{COLLECTION_PATH}"
        return url

    if config.deployed:
        logger.error("API_BASE_URL is not set in a deployed environment")
        raise ConfigurationError(
            "Task server URL is not configured. "
            "Set API_BASE_URL in countdown.conf or COUNTDOWN_API_BASE_URL."
        )
    return LOCAL_BASE_URL
