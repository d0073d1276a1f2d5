"""
Public interfaces for the webhook notifier.
"""

from .schemas.detection import Camera, DetectionEvent, ProcessedImage
from .services.notification_service import NotificationService
from .services.notifications import AuthorizationMethod, HttpMethod, NotificationTarget, WebhookNotifier

__all__ = [
    "Camera",
    "DetectionEvent",
    "ProcessedImage",
    "NotificationService",
    "AuthorizationMethod",
    "HttpMethod",
    "NotificationTarget",
    "WebhookNotifier",
]
