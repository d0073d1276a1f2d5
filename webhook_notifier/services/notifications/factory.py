from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

from webhook_notifier.config import Config, ConfigurationError
from webhook_notifier.services.notifications import (
    AuthorizationMethod,
    NotificationSender,
    NotificationTarget,
    WebhookNotifier,
)

logger = logging.getLogger(__name__)


def _lower_keys(section: Mapping[str, Any]) -> Dict[str, Any]:
    return {str(k).lower(): v for k, v in section.items()}


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _parse_authentication(value: Any) -> AuthorizationMethod:
    try:
        return AuthorizationMethod.parse(None if value is None else str(value))
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def target_from_section(section: Mapping[str, Any]) -> NotificationTarget:
    """Build a target from one notifier entry. Keys are case-insensitive."""
    s = _lower_keys(section)
    url = s.get("url")
    if not url:
        raise ConfigurationError("Webhook notifier requires a 'Url'")
    return NotificationTarget(
        url=str(url),
        method=str(s.get("method") or "POST"),
        authentication=_parse_authentication(s.get("authentication")),
        username=s.get("username"),
        password=s.get("password"),
        token=s.get("token"),
        field=str(s.get("field") or "image"),
        send_image=_as_bool(s.get("sendimage"), True),
        send_types=_as_bool(s.get("sendtypes"), False),
    )


def load_targets(path: str) -> List[NotificationTarget]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not read notifiers file '{path}': {exc}") from exc

    sections = _lower_keys(data).get("notifiers", []) if isinstance(data, dict) else data
    if not isinstance(sections, list):
        raise ConfigurationError(f"'Notifiers' in '{path}' must be a list")

    targets: List[NotificationTarget] = []
    for section in sections:
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"Notifier entries in '{path}' must be objects")
        kind = str(_lower_keys(section).get("type", "Webhook"))
        if kind.lower() != "webhook":
            raise ConfigurationError(f"Unsupported notifier type '{kind}'")
        targets.append(target_from_section(section))
    return targets


def target_from_env(cfg: Config) -> Optional[NotificationTarget]:
    if not cfg.webhook_url:
        return None
    return NotificationTarget(
        url=cfg.webhook_url,
        method=cfg.webhook_method,
        authentication=_parse_authentication(cfg.webhook_auth),
        username=cfg.webhook_username,
        password=cfg.webhook_password,
        token=cfg.webhook_token,
        field=cfg.webhook_field,
        send_image=cfg.webhook_send_image,
        send_types=cfg.webhook_send_types,
    )


def create_notifiers_from_config(cfg: Config, session: requests.Session) -> List[NotificationSender]:
    targets: List[NotificationTarget] = []
    if cfg.notifiers_file:
        targets.extend(load_targets(cfg.notifiers_file))
    env_target = target_from_env(cfg)
    if env_target is not None:
        targets.append(env_target)

    notifiers: List[NotificationSender] = [
        WebhookNotifier(target=t, session=session, timeout=cfg.http_timeout) for t in targets
    ]
    logger.debug("Configured %d notifier(s)", len(notifiers))
    return notifiers
