"""Configuration loading for backlog-digest.

The configuration is built once at process start and handed to every
component explicitly. Values come from an optional YAML file first and are
completed from environment variables (a local ``.env`` file is honoured).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from apscheduler.triggers.cron import CronTrigger
from dotenv import load_dotenv

DEFAULT_TIMEZONE = "Asia/Jakarta"
DEFAULT_CRON = "0 6 * * *"
DEFAULT_TRELLO_BASE_URL = "https://api.trello.com/1"

# Config field -> environment variable
ENV_VARS = {
    "webhook_url": "DISCORD_WEBHOOK_URL",
    "trello_key": "TRELLO_KEY",
    "trello_token": "TRELLO_TOKEN",
    "board_id": "TRELLO_BOARD_ID",
    "timezone": "BACKLOG_DIGEST_TIMEZONE",
    "cron": "BACKLOG_DIGEST_CRON",
    "trello_base_url": "TRELLO_API_BASE",
}

REQUIRED_FIELDS = ("webhook_url", "trello_key", "trello_token", "board_id")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class DigestConfig:
    """Settings for one backlog-digest process.

    Attributes:
        webhook_url: Discord webhook the report is posted to.
        trello_key: Trello API key.
        trello_token: Trello API token.
        board_id: Trello board to scan for backlog lists.
        timezone: IANA timezone the schedule and log timestamps use.
        cron: Five-field crontab expression for the daily trigger.
        trello_base_url: Trello REST API root.
    """

    webhook_url: str
    trello_key: str
    trello_token: str
    board_id: str
    timezone: str = DEFAULT_TIMEZONE
    cron: str = DEFAULT_CRON
    trello_base_url: str = DEFAULT_TRELLO_BASE_URL

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DigestConfig:
        """Create config from a mapping of field names to values.

        Raises:
            ConfigError: If required fields are missing or a value is invalid.
        """
        missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
        if missing:
            names = ", ".join(f"{f} ({ENV_VARS[f]})" for f in missing)
            raise ConfigError(f"Missing required settings: {names}")

        timezone = str(data.get("timezone") or DEFAULT_TIMEZONE)
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {timezone}") from e

        cron = str(data.get("cron") or DEFAULT_CRON)
        if len(cron.split()) != 5:
            raise ConfigError(f"Cron expression must have 5 fields, got: {cron!r}")
        try:
            CronTrigger.from_crontab(cron, timezone=ZoneInfo(timezone))
        except ValueError as e:
            raise ConfigError(f"Invalid cron expression {cron!r}: {e}") from e

        return cls(
            webhook_url=str(data["webhook_url"]),
            trello_key=str(data["trello_key"]),
            trello_token=str(data["trello_token"]),
            board_id=str(data["board_id"]),
            timezone=timezone,
            cron=cron,
            trello_base_url=str(data.get("trello_base_url") or DEFAULT_TRELLO_BASE_URL).rstrip(
                "/"
            ),
        )


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")
    return data


def load_config(
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> DigestConfig:
    """Load configuration from an optional YAML file and the environment.

    Args:
        config_path: Optional YAML file whose keys match DigestConfig fields.
        environ: Environment mapping. Defaults to os.environ after loading .env.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If the file is unreadable or required settings are missing.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    data: dict[str, Any] = {}
    if config_path is not None:
        data.update(_read_yaml(Path(config_path)))

    for field_name, env_name in ENV_VARS.items():
        if not data.get(field_name) and environ.get(env_name):
            data[field_name] = environ[env_name]

    return DigestConfig.from_dict(data)
