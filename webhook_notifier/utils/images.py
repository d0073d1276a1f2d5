from __future__ import annotations

from datetime import datetime
import os
from typing import Optional

import cv2
import numpy as np

from webhook_notifier.schemas.detection import ProcessedImage


def encode_jpeg(img: np.ndarray, quality: int = 80) -> bytes:
    ok, data = cv2.imencode(".jpg", img, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    if not ok:
        raise RuntimeError("JPEG encode failed")
    return data.tobytes()


def save_processed_image(
    frame: np.ndarray,
    directory: str,
    camera_name: str,
    timestamp: Optional[datetime] = None,
    quality: int = 80,
) -> ProcessedImage:
    """Write an annotated BGR frame as `{camera}_{YYYYmmdd_HHMMSS_fff}.jpeg`.

    The directory is created if needed.
    """
    ts = timestamp or datetime.now()
    os.makedirs(directory, exist_ok=True)
    name = f"{camera_name}_{ts.strftime('%Y%m%d_%H%M%S')}_{ts.microsecond // 1000:03d}.jpeg"
    path = os.path.join(directory, name)
    with open(path, "wb") as fh:
        fh.write(encode_jpeg(frame, quality=quality))
    return ProcessedImage(file_path=path)
