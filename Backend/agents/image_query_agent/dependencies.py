from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from loguru import logger

from agents.image_query_agent.agent.mock_image_query_agent import MockImageQueryAgent
from agents.image_query_agent.agent.openai_image_query_agent import OpenAIImageQueryAgent
from agents.image_query_agent.services.image_query_agent_service import ImageQueryAgent, \
    ImageQueryAgentService
from config.mode import Mode, resolve_mode
from config.settings import get_settings


# =============================================================================
# MODE
# =============================================================================

@lru_cache
def get_mode() -> Mode:
    """Resolve the gateway mode once per process."""
    mode = resolve_mode(get_settings())
    logger.info(f"Image query mode resolved to {mode.value}")
    return mode


# =============================================================================
# AGENT DEPENDENCIES
# =============================================================================

@lru_cache
def get_image_query_agent() -> ImageQueryAgent:
    """Provide the mock or live agent matching the resolved mode."""
    settings = get_settings()
    if get_mode() is Mode.MOCK:
        return MockImageQueryAgent()

    return OpenAIImageQueryAgent(
        api_key=settings.OPENAI_API_KEY,
        model=settings.IMAGE_QUERY_AGENT_MODEL,
        max_tokens=settings.IMAGE_QUERY_AGENT_MAX_TOKENS
    )


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_image_query_agent_service(
        image_query_agent: Annotated[ImageQueryAgent, Depends(get_image_query_agent)],
        mode: Annotated[Mode, Depends(get_mode)]) -> ImageQueryAgentService:
    """Provide a configured ImageQueryAgentService instance."""
    return ImageQueryAgentService(image_query_agent, mode)


# =============================================================================
# TYPE ALIASES FOR DEPENDENCY INJECTION
# =============================================================================

ImageQueryAgentServiceDependency = Annotated[
    ImageQueryAgentService, Depends(get_image_query_agent_service)]

ModeDependency = Annotated[Mode, Depends(get_mode)]
