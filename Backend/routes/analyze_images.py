from typing import List

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from agents.image_query_agent.dependencies import ImageQueryAgentServiceDependency
from agents.image_query_agent.exceptions import ImageQueryError
from agents.image_query_agent.schemas import DEFAULT_IMAGE_MIME_TYPE, QueryImage
from config.settings import get_settings
from routes.schemas.response.analyze_images import AnalyzeImagesResponse, ErrorResponse, ImageQueryResult

router = APIRouter()

ACCEPTED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif", "image/svg+xml"}

MISSING_FIELDS_MESSAGE = "Missing question or images."


class ImageQueryFormError(Exception):
    """The multipart body could not be turned into a valid (question, images) pair."""


class ImageQueryForm(BaseModel):
    question: str
    images: List[QueryImage]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def parse_image_query_form(request: Request, max_images: int) -> ImageQueryForm:
    """
    Read the multipart body into a question and the uploaded images.

    ``images`` may hold a single file part or several; non-file values are ignored.

    Raises:
        ImageQueryFormError: Body is malformed, a field is missing, or the image set is invalid
    """
    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        raise ImageQueryFormError(f"Malformed multipart body: {getattr(e, 'detail', e)}") from e

    try:
        question = form.get("question")
        question = question.strip() if isinstance(question, str) else ""
        uploads = [item for item in form.getlist("images") if isinstance(item, UploadFile) and item.filename]

        if not question or not uploads:
            raise ImageQueryFormError(MISSING_FIELDS_MESSAGE)

        if len(uploads) > max_images:
            raise ImageQueryFormError(f"Too many images. At most {max_images} images are allowed.")

        images = []
        for upload in uploads:
            content_type = upload.content_type or DEFAULT_IMAGE_MIME_TYPE
            if content_type not in ACCEPTED_IMAGE_TYPES:
                raise ImageQueryFormError(f"Unsupported image type: {content_type}")
            images.append(QueryImage(filename=upload.filename, content_type=content_type, data=await upload.read()))
    finally:
        await form.close()

    return ImageQueryForm(question=question, images=images)


@router.api_route(
    "/analyze-images",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=AnalyzeImagesResponse,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_images(
        request: Request,
        image_query_service: ImageQueryAgentServiceDependency
):
    """
    Answer one question about 1-4 uploaded images.

    Accepts multipart/form-data with a ``question`` field and one or more ``images`` parts.
    Returns one result per image in upload order.
    """
    if request.method != "POST":
        return _error(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")

    try:
        form = await parse_image_query_form(request, get_settings().MAX_IMAGES_PER_REQUEST)
    except ImageQueryFormError as e:
        logger.warning(f"Rejected analyze-images request: {e}")
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    logger.info(f"analyze_images called with {len(form.images)} image(s), question length {len(form.question)}")

    try:
        answers = await image_query_service.ask(form.question, form.images)
    except ImageQueryError as e:
        logger.error(f"Image query failed: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    except Exception as e:
        logger.exception(f"Unexpected error while analyzing images: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "Server error")

    return AnalyzeImagesResponse(results=[ImageQueryResult(response=answer) for answer in answers])
