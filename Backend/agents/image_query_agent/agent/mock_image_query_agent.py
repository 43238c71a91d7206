from loguru import logger

from agents.image_query_agent.schemas import QueryImage

MOCK_IMAGE_RESPONSE = "Mock LLM response: Image analyzed successfully."


class MockImageQueryAgent:
    """Network-free stand-in for the vision model, used for demos and tests."""

    def __init__(self, response: str = MOCK_IMAGE_RESPONSE):
        self.response = response
        logger.info("Initialized MockImageQueryAgent")

    async def answer(self, question: str, image: QueryImage) -> str:
        logger.debug(f"Mock answer for {image.filename}")
        return self.response
