from typing import List

from pydantic import BaseModel, Field


class ImageQueryResult(BaseModel):
    """Answer for one image."""
    response: str = Field(..., description="Model answer for the image at the same position")


class AnalyzeImagesResponse(BaseModel):
    """Successful batch response, results in request order."""
    results: List[ImageQueryResult]


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable failure reason")
