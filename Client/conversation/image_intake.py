"""
Image intake: validates candidate files before they join the accepted image set.

The accepted set is an immutable tuple. Every change produces a new tuple so
the caller can swap it in one assignment.
"""

import mimetypes
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

MAX_IMAGES = 4

ACCEPTED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif", "image/svg+xml"})


class ImageHandle(BaseModel):
    """A candidate or accepted image plus the metadata used to spot duplicates."""
    model_config = ConfigDict(frozen=True)

    name: str
    byte_size: int = Field(..., ge=0)
    last_modified: int = Field(..., description="Last modification time in milliseconds since the epoch")
    mime_type: str
    data: bytes = Field(..., repr=False)

    @property
    def identity(self) -> Tuple[str, int, int]:
        # Metadata heuristic, not a content hash
        return self.name, self.byte_size, self.last_modified

    @classmethod
    def from_path(cls, path: str | Path) -> "ImageHandle":
        """Build a handle from a local file."""
        path = Path(path)
        data = path.read_bytes()
        stat = path.stat()
        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(
            name=path.name,
            byte_size=len(data),
            last_modified=int(stat.st_mtime * 1000),
            mime_type=mime_type,
            data=data,
        )


AcceptedImageSet = Tuple[ImageHandle, ...]


class IntakeError(str, Enum):
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    DUPLICATE_IMAGE = "DUPLICATE_IMAGE"

    @property
    def message(self) -> str:
        return INTAKE_ERROR_MESSAGES[self]


INTAKE_ERROR_MESSAGES = {
    IntakeError.LIMIT_EXCEEDED: f"Only {MAX_IMAGES} images can be used for comparison.",
    IntakeError.UNSUPPORTED_TYPE: "Only JPEG, PNG, WEBP, GIF and SVG images are supported.",
    IntakeError.DUPLICATE_IMAGE: "This image has already been added.",
}


class IntakeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    images: AcceptedImageSet
    error: Optional[IntakeError] = None


def try_add(candidates: Iterable[ImageHandle], current: AcceptedImageSet) -> IntakeResult:
    """
    Append candidates to the accepted set, stopping at the first invalid one.

    Rules per candidate, in order: the set is full, the media type is not
    accepted, an image with the same (name, size, timestamp) is already present.
    Candidates accepted before the failing one are kept.
    """
    working = tuple(current)
    for candidate in candidates:
        if len(working) >= MAX_IMAGES:
            error = IntakeError.LIMIT_EXCEEDED
        elif candidate.mime_type not in ACCEPTED_IMAGE_TYPES:
            error = IntakeError.UNSUPPORTED_TYPE
        elif any(image.identity == candidate.identity for image in working):
            error = IntakeError.DUPLICATE_IMAGE
        else:
            working = working + (candidate,)
            continue

        logger.warning(f"Rejected image {candidate.name}: {error.value}")
        return IntakeResult(images=working, error=error)

    return IntakeResult(images=working)


def remove_at(index: int, current: AcceptedImageSet) -> AcceptedImageSet:
    """Return a new set without the image at ``index``; the index is validated by the caller."""
    return current[:index] + current[index + 1:]
