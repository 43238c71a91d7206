"""Image Query Agent answering questions about single images with an OpenAI vision model."""

import base64
from typing import Optional

from loguru import logger
from openai import AsyncOpenAI, OpenAIError

from agents.image_query_agent.exceptions import ConfigurationError, UpstreamError
from agents.image_query_agent.schemas import DEFAULT_IMAGE_MIME_TYPE, QueryImage

NO_RESPONSE = "No response."


class OpenAIImageQueryAgent:
    """Sends one (question, image) pair per call to the OpenAI chat completions API."""

    def __init__(self, api_key: Optional[str], model: str = "gpt-4o", max_tokens: int = 400):
        """
        Initialize the OpenAI Image Query Agent.

        Args:
            api_key: OpenAI API key; when missing every call fails with ConfigurationError
            model: Vision-capable chat model
            max_tokens: Upper bound on the answer length
        """
        self.model = model
        self.max_tokens = max_tokens
        # Single attempt per image, the SDK must not retry on its own
        self.client: Optional[AsyncOpenAI] = AsyncOpenAI(api_key=api_key, max_retries=0) if api_key else None

        logger.info(f"Initialized OpenAIImageQueryAgent with model: {self.model}")

    def _build_messages(self, question: str, image: QueryImage) -> list[dict]:
        base64_image = base64.b64encode(image.data).decode("utf-8")
        mime_type = image.content_type or DEFAULT_IMAGE_MIME_TYPE
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": question},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{base64_image}"},
                    },
                ],
            }
        ]

    async def answer(self, question: str, image: QueryImage) -> str:
        """
        Ask the vision model a question about one image.

        Args:
            question: User's question, passed through verbatim
            image: Uploaded image to analyze

        Returns:
            The model's textual answer

        Raises:
            ConfigurationError: No API key is configured
            UpstreamError: The OpenAI call failed
        """
        if self.client is None:
            raise ConfigurationError("Missing OpenAI API key.")

        logger.info(f"Analyzing {image.filename} ({len(image.data)} bytes) with {self.model}")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self._build_messages(question, image),
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI call failed for {image.filename}: {e}")
            raise UpstreamError(f"OpenAI API error: {e}") from e

        if not response.choices:
            return NO_RESPONSE
        return response.choices[0].message.content or NO_RESPONSE
