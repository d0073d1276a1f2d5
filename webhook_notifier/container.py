from __future__ import annotations

"""Dependency container that wires config, HTTP session, notifiers, and the notification service."""

from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
import requests

from webhook_notifier.config import Config
from webhook_notifier.schemas.detection import Camera, DetectionEvent
from webhook_notifier.services.notification_service import NotificationService
from webhook_notifier.services.notifications.factory import create_notifiers_from_config
from webhook_notifier.utils.images import save_processed_image


@dataclass
class Container:
    config: Config
    session: Optional[requests.Session] = None

    def __post_init__(self) -> None:
        # One pooled session for every notifier; closed in close()
        owned = self.session is None
        if owned:
            self.session = requests.Session()
        try:
            self.notifiers = create_notifiers_from_config(self.config, session=self.session)
        except Exception:
            if owned:
                self.session.close()
            raise
        self.service = NotificationService(self.notifiers)

    def notify_frame(self, camera_name: str, frame: np.ndarray, found_types: Iterable[str]) -> int:
        """Persist an annotated frame to the captures directory and notify about it."""
        image = save_processed_image(frame, self.config.captures_dir, camera_name)
        event = DetectionEvent(camera=Camera(name=camera_name), image=image, found_types=tuple(found_types))
        return self.service.notify(event)

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
