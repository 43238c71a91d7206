"""Schemas for the Image Query Agent."""

from pydantic import BaseModel, Field

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


class QueryImage(BaseModel):
    """One uploaded image, read fully into memory."""
    filename: str = Field(..., description="Original file name of the part")
    content_type: str = Field(DEFAULT_IMAGE_MIME_TYPE, description="Declared media type of the part")
    data: bytes = Field(..., description="Raw image bytes")
