from __future__ import annotations

"""Fans a detection event out to every configured notifier.

A notifier failure (transport error, bad configuration surfacing at send
time) is logged and never stops the remaining notifiers.
"""

from concurrent.futures import ThreadPoolExecutor
import logging
from typing import List, Sequence

from webhook_notifier.schemas.detection import DetectionEvent
from webhook_notifier.services.notifications.base import NotificationSender

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifiers: Sequence[NotificationSender], max_workers: int = 4) -> None:
        self._notifiers: List[NotificationSender] = list(notifiers)
        self._max_workers = max(1, max_workers)

    @property
    def notifiers(self) -> List[NotificationSender]:
        return list(self._notifiers)

    def notify(self, event: DetectionEvent) -> int:
        """Send `event` through all notifiers concurrently and wait for them.

        Returns the number of notifiers that completed without raising.
        """
        if not self._notifiers:
            logger.debug("%s: No notifiers configured", event.camera.name)
            return 0

        workers = min(self._max_workers, len(self._notifiers))
        completed = 0
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="Notifier") as pool:
            futures = [(n, pool.submit(n.send, event)) for n in self._notifiers]
            for notifier, future in futures:
                try:
                    future.result()
                except Exception:
                    logger.exception(
                        "%s: %s failed to send notification", event.camera.name, type(notifier).__name__
                    )
                else:
                    completed += 1
        return completed
