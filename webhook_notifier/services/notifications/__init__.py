from .base import AuthorizationMethod, HttpMethod, NotificationSender, NotificationTarget, NotifierBase
from .auth import build_authorization, format_authorization
from .webhook import WebhookNotifier

__all__ = [
    "AuthorizationMethod",
    "HttpMethod",
    "NotificationSender",
    "NotificationTarget",
    "NotifierBase",
    "build_authorization",
    "format_authorization",
    "WebhookNotifier",
]
