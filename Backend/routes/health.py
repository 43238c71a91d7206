from fastapi import APIRouter, status

from agents.image_query_agent.dependencies import ModeDependency
from config.settings import get_settings
from routes.schemas.response.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health(mode: ModeDependency) -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        mode=mode.value
    )
