from __future__ import annotations

"""Application configuration and defaults.

Reads environment variables and provides a typed configuration object.
"""

from dataclasses import dataclass
import os
from typing import Optional


class ConfigurationError(ValueError):
    """Raised when the notifier configuration cannot be loaded."""


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'") from exc


@dataclass(frozen=True)
class Config:
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE")

    # Notifiers described in a JSON file ({"Notifiers": [...]})
    notifiers_file: Optional[str] = os.getenv("NOTIFIERS_FILE")

    # Single webhook configured straight from the environment (optional)
    webhook_url: Optional[str] = os.getenv("WEBHOOK_URL")
    webhook_method: str = os.getenv("WEBHOOK_METHOD", "POST")
    webhook_auth: Optional[str] = os.getenv("WEBHOOK_AUTH")
    webhook_username: Optional[str] = os.getenv("WEBHOOK_USERNAME")
    webhook_password: Optional[str] = os.getenv("WEBHOOK_PASSWORD")
    webhook_token: Optional[str] = os.getenv("WEBHOOK_TOKEN")
    webhook_field: str = os.getenv("WEBHOOK_FIELD", "image")
    webhook_send_image: bool = env_flag("WEBHOOK_SEND_IMAGE", True)
    webhook_send_types: bool = env_flag("WEBHOOK_SEND_TYPES", False)

    # HTTP
    http_timeout: float = 10.0

    # Where processed snapshots are written
    captures_dir: str = os.getenv("CAPTURES_DIR", "captures")

    @classmethod
    def from_env(cls) -> "Config":
        """Build a config from the current environment.

        Field defaults are evaluated at import time, so this re-reads the
        variables for callers (and tests) that change them afterwards.
        """
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE"),
            notifiers_file=os.getenv("NOTIFIERS_FILE"),
            webhook_url=os.getenv("WEBHOOK_URL"),
            webhook_method=os.getenv("WEBHOOK_METHOD", "POST"),
            webhook_auth=os.getenv("WEBHOOK_AUTH"),
            webhook_username=os.getenv("WEBHOOK_USERNAME"),
            webhook_password=os.getenv("WEBHOOK_PASSWORD"),
            webhook_token=os.getenv("WEBHOOK_TOKEN"),
            webhook_field=os.getenv("WEBHOOK_FIELD", "image"),
            webhook_send_image=env_flag("WEBHOOK_SEND_IMAGE", True),
            webhook_send_types=env_flag("WEBHOOK_SEND_TYPES", False),
            http_timeout=_env_float("HTTP_TIMEOUT", 10.0),
            captures_dir=os.getenv("CAPTURES_DIR", "captures"),
        )
