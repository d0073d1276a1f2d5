from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from webhook_notifier.schemas.detection import DetectionEvent


class AuthorizationMethod(str, Enum):
    """Authentication scheme used for outgoing webhook requests."""

    NONE = "None"
    BASIC = "Basic"
    BEARER = "Bearer"

    @classmethod
    def parse(cls, value: Optional[str]) -> "AuthorizationMethod":
        """Case-insensitive lookup; empty values mean no authentication."""
        if not value:
            return cls.NONE
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"Unknown authentication method '{value}'")


class HttpMethod(str, Enum):
    DELETE = "DELETE"
    GET = "GET"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.PATCH, HttpMethod.POST, HttpMethod.PUT)

    @classmethod
    def resolve(cls, token: str) -> Optional["HttpMethod"]:
        """Exact, case-sensitive match of a configured token. Returns None if unsupported."""
        try:
            return cls(token)
        except ValueError:
            return None


@dataclass(frozen=True)
class NotificationTarget:
    """Webhook endpoint configuration, loaded once and reused for every event.

    `method` is kept as the raw configured token so that an unsupported value
    is reported when a notification is attempted rather than at load time.
    """

    url: str
    method: str = "POST"
    authentication: AuthorizationMethod = AuthorizationMethod.NONE
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    field: str = "image"
    send_image: bool = True
    send_types: bool = False


class NotificationSender:
    """Base class for notification senders.

    Subclasses should implement `send`.
    """

    def send(self, event: DetectionEvent) -> None:  # pragma: no cover
        raise NotImplementedError


class NotifierBase(NotificationSender):
    """Sender with the options shared by every notifier type."""

    def __init__(self, send_types: bool = False) -> None:
        self.send_types = send_types
