from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import BinaryIO, Iterable, Tuple


@dataclass(frozen=True)
class Camera:
    """Camera that triggered a detection. Only the name is used, as a log prefix."""

    name: str


@dataclass(frozen=True)
class ProcessedImage:
    """Annotated snapshot produced by the detection pipeline.

    - file_path: location of the encoded image on disk
    - file_name: basename sent as the multipart filename
    """

    file_path: str

    @property
    def file_name(self) -> str:
        return os.path.basename(self.file_path)

    def open_readonly(self) -> BinaryIO:
        """Open a new read-only binary stream. The caller owns (and must close) it."""
        return open(self.file_path, "rb")


@dataclass(frozen=True)
class DetectionEvent:
    """A single detection handed to the notifiers.

    - camera: camera that saw the objects
    - image: processed image to optionally attach
    - found_types: detected object type names, in detection order
    """

    camera: Camera
    image: ProcessedImage
    found_types: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, camera_name: str, image_path: str, found_types: Iterable[str]) -> "DetectionEvent":
        return cls(
            camera=Camera(name=camera_name),
            image=ProcessedImage(file_path=image_path),
            found_types=tuple(found_types),
        )
