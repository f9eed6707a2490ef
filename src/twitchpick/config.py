"""Credentials from the environment and settings from an optional YAML file."""

import logging
import os
import pathlib
from collections.abc import Mapping
from dataclasses import dataclass

import yaml

from .errors import ConfigError
from .types import (
    DEFAULT_LIMIT,
    DEFAULT_PLAYER,
    DEFAULT_QUALITY,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_LIMIT,
)

logger = logging.getLogger(__name__)

TOKEN_VAR = "TWITCH_ACCESS_TOKEN"
CLIENT_ID_VAR = "TWITCH_CLIENT_ID"
PLAYER_VAR = "TWITCHPICK_PLAYER"
DEFAULT_CONFIG_PATH = pathlib.Path("~/.config/twitchpick/config.yaml")


@dataclass(frozen=True)
class Credentials:
    """API credentials.

    Attributes:
        token: OAuth bearer token.
        client_id: Application client id.
    """

    token: str
    client_id: str


@dataclass
class Settings:
    """User preferences.

    Attributes:
        player: Player executable or path.
        quality: Quality selector passed to the player.
        limit: Maximum entries per listing.
        timeout: HTTP timeout in seconds.
    """

    player: str = DEFAULT_PLAYER
    quality: str = DEFAULT_QUALITY
    limit: int = DEFAULT_LIMIT
    timeout: float = DEFAULT_TIMEOUT_SECONDS


def load_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """
    Read the access token and client id from the environment.

    Args:
        environ: Environment to read (default: os.environ).

    Raises:
        ConfigError: If either variable is missing or blank.
    """
    environ = os.environ if environ is None else environ
    values = {}
    for var in (TOKEN_VAR, CLIENT_ID_VAR):
        value = environ.get(var, "").strip()
        if not value:
            msg = f"{var} is not set. Export it with your Twitch credentials."
            raise ConfigError(msg)
        values[var] = value
    return Credentials(token=values[TOKEN_VAR], client_id=values[CLIENT_ID_VAR])


def validate_limit(limit: object) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT:
        msg = f"'limit' must be an integer between 1 and {MAX_LIMIT}, got {limit!r}"
        raise ConfigError(msg)
    return limit


def _settings_from_mapping(data: dict) -> Settings:
    settings = Settings()
    unknown = set(data) - {"player", "quality", "limit", "timeout"}
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))

    for key in ("player", "quality"):
        if key in data:
            if not isinstance(data[key], str) or not data[key]:
                msg = f"'{key}' must be a non-empty string"
                raise ConfigError(msg)
            setattr(settings, key, data[key])

    if "limit" in data:
        settings.limit = validate_limit(data["limit"])

    if "timeout" in data:
        timeout = data["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
            msg = f"'timeout' must be a positive number, got {timeout!r}"
            raise ConfigError(msg)
        settings.timeout = float(timeout)

    return settings


def load_settings(
    yaml_path: pathlib.Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Load settings from a YAML configuration file.

    Args:
        yaml_path: Path to the config file. If None, the default location is
            used and may be absent.
        environ: Environment to read overrides from (default: os.environ).

    Returns:
        Settings with defaults for anything not configured.

    Raises:
        ConfigError: If an explicit file is missing or the file is invalid.
    """
    environ = os.environ if environ is None else environ
    explicit = yaml_path is not None
    path = (yaml_path or DEFAULT_CONFIG_PATH).expanduser()

    if path.exists():
        try:
            with path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Could not parse {path}: {e}"
            raise ConfigError(msg) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            msg = f"{path} must contain a mapping of settings"
            raise ConfigError(msg)
        logger.debug("Loaded settings from %s", path)
        settings = _settings_from_mapping(data)
    elif explicit:
        msg = f"Configuration not found at {path}"
        raise ConfigError(msg)
    else:
        settings = Settings()

    player = environ.get(PLAYER_VAR, "").strip()
    if player:
        settings.player = player
    return settings
