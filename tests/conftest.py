"""
Pytest configuration and shared fixtures.

The webhook notifier talks to a `requests.Session`; tests inject a fake
session that records every request instead of touching the network.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from webhook_notifier.schemas.detection import Camera, DetectionEvent, ProcessedImage


@dataclass
class FakeResponse:
    status_code: int = 200


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: Dict[str, str]
    data: Optional[bytes]
    timeout: Optional[float]


class FakeSession:
    """Stands in for requests.Session and captures outgoing requests."""

    def __init__(self, status_code: int = 200, error: Optional[Exception] = None):
        self.status_code = status_code
        self.error = error
        self.requests: List[RecordedRequest] = []
        self.closed = False

    def request(self, method: str, url: str, headers=None, data=None, timeout=None, **kwargs: Any):
        self.requests.append(RecordedRequest(method, url, dict(headers or {}), data, timeout))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status_code)

    def close(self) -> None:
        self.closed = True


@dataclass(frozen=True)
class TrackingImage(ProcessedImage):
    """ProcessedImage that remembers the streams it handed out."""

    opened: List[Any] = field(default_factory=list, compare=False)

    def open_readonly(self):
        stream = super().open_readonly()
        self.opened.append(stream)
        return stream


IMAGE_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-bytes\xff\xd9"


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "Driveway_20240101_120000_000.jpeg"
    path.write_bytes(IMAGE_BYTES)
    return str(path)


@pytest.fixture
def tracking_image(image_path):
    return TrackingImage(file_path=image_path)


@pytest.fixture
def event(tracking_image):
    return DetectionEvent(camera=Camera(name="Driveway"), image=tracking_image, found_types=("person", "car"))


@pytest.fixture
def session():
    return FakeSession()
