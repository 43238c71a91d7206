import asyncio
from typing import List, Protocol

from loguru import logger

from agents.image_query_agent.schemas import QueryImage
from config.mode import Mode


class ImageQueryAgent(Protocol):
    async def answer(self, question: str, image: QueryImage) -> str:
        ...


class ImageQueryAgentService:
    """Model Gateway: one answer per image, in the order the images were given."""

    def __init__(self, image_query_agent: ImageQueryAgent, mode: Mode):
        self.image_query_agent = image_query_agent
        self.mode = mode

    async def ask(self, question: str, images: List[QueryImage]) -> List[str]:
        """
        Answer the same question for every image concurrently.

        Args:
            question: User's question
            images: Images in request order

        Returns:
            Answers aligned with ``images`` regardless of completion order

        Raises:
            ImageQueryError: Any single call failed; no partial results are returned
        """
        logger.info(f"Dispatching {len(images)} image call(s) in {self.mode.value} mode")

        answers = await asyncio.gather(
            *(self.image_query_agent.answer(question, image) for image in images)
        )

        logger.info(f"Collected {len(answers)} answer(s)")
        return list(answers)
