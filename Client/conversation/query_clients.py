"""Submission backends used by the conversation orchestrator."""

from typing import List, Optional, Protocol, Sequence

import httpx
from loguru import logger

from conversation.demo_answers import lookup_demo_answer
from conversation.image_intake import ImageHandle


class SubmissionError(Exception):
    """The question could not be answered; the message is safe to show to the user."""


class ImageQueryClient(Protocol):
    async def ask(self, question: str, images: Sequence[ImageHandle]) -> str:
        ...


def combine_answers(answers: List[str]) -> str:
    """Collapse per-image answers into the single text shown in the transcript."""
    if len(answers) == 1:
        return answers[0]
    return "\n\n".join(f"Image {index}: {answer}" for index, answer in enumerate(answers, start=1))


class HttpImageQueryClient:
    """Posts the question and images to the analyze-images endpoint."""

    def __init__(
            self,
            base_url: str,
            path: str = "/api/analyze-images",
            timeout: Optional[float] = 120.0,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url
        self.path = path
        self.timeout = timeout
        self.transport = transport

    async def ask(self, question: str, images: Sequence[ImageHandle]) -> str:
        files = [("images", (image.name, image.data, image.mime_type)) for image in images]
        logger.info(f"Submitting question with {len(files)} image(s) to {self.base_url}{self.path}")

        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self.transport) as client:
                response = await client.post(self.path, data={"question": question}, files=files)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Request to analyze-images failed: {e}")
            raise SubmissionError(f"Could not reach the server: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code != httpx.codes.OK:
            message = body.get("error") if isinstance(body, dict) else None
            logger.error(f"analyze-images returned {response.status_code}: {message}")
            raise SubmissionError(message or f"Server error ({response.status_code})")

        results = body.get("results") if isinstance(body, dict) else None
        if not results:
            raise SubmissionError("The server returned no results.")
        if not isinstance(results, list) or not all(isinstance(result, dict) for result in results):
            logger.error(f"Unexpected analyze-images payload: {body}")
            raise SubmissionError("The server returned an unexpected response.")

        return combine_answers([str(result.get("response", "")) for result in results])


class DemoImageQueryClient:
    """Answers from a fixed table without touching the network."""

    async def ask(self, question: str, images: Sequence[ImageHandle]) -> str:
        logger.debug(f"Demo answer lookup for {len(images)} image(s)")
        return lookup_demo_answer(question)
