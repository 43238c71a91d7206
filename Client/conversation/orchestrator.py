"""
Conversation orchestrator: owns the accepted images, the transcript and the
submission lifecycle. Submitting is the synchronous step that records the
user turn and placeholder, so the observable states are Idle and Resolving.
"""

from enum import Enum
from typing import Iterable, List, Literal, Optional, Tuple

from loguru import logger
from pydantic import BaseModel

from conversation.image_intake import MAX_IMAGES, AcceptedImageSet, ImageHandle, remove_at, try_add
from conversation.previews import PreviewRegistry
from conversation.query_clients import ImageQueryClient, SubmissionError
from conversation.transient_message import TransientMessage

PENDING_TEXT = "Analyzing…"
EMPTY_QUESTION_MESSAGE = "Please type a question."
NO_IMAGES_MESSAGE = f"Please add between 1 and {MAX_IMAGES} images."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong while analyzing the images. Please try again."


class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    text: str
    pending: bool = False


class SubmissionState(str, Enum):
    IDLE = "IDLE"
    RESOLVING = "RESOLVING"


class ConversationOrchestrator:
    def __init__(self, query_client: ImageQueryClient, error_display_seconds: float = 10.0,
                 error_message: Optional[TransientMessage] = None):
        self.query_client = query_client
        self.state = SubmissionState.IDLE
        self._images: AcceptedImageSet = ()
        self._transcript: List[ConversationTurn] = []
        self._previews = PreviewRegistry()
        self._error = error_message or TransientMessage(ttl=error_display_seconds)

    @property
    def images(self) -> AcceptedImageSet:
        return self._images

    @property
    def transcript(self) -> Tuple[ConversationTurn, ...]:
        return tuple(self._transcript)

    @property
    def previews(self) -> List[str]:
        return self._previews.sync(self._images)

    @property
    def error(self) -> Optional[str]:
        return self._error.text

    @property
    def busy(self) -> bool:
        return self.state is not SubmissionState.IDLE

    def add_images(self, candidates: Iterable[ImageHandle]) -> bool:
        """Validate and attach candidates; returns False when one was rejected."""
        result = try_add(candidates, self._images)
        self._set_images(result.images)
        if result.error is not None:
            self._error.show(result.error.message)
            return False
        return True

    def remove_image(self, index: int):
        self._set_images(remove_at(index, self._images))
        self._error.clear()

    def _set_images(self, images: AcceptedImageSet):
        self._images = images
        self._previews.sync(images)

    async def submit(self, question: str) -> bool:
        """
        Send ``question`` with the current images and record the answer.

        Returns False without touching the transcript when the question is empty,
        the image count is out of range, or another submission is in flight.
        """
        if self.busy:
            logger.warning("Submission ignored, a previous question is still resolving")
            return False

        question = question.strip()
        if not question:
            self._error.show(EMPTY_QUESTION_MESSAGE)
            return False
        if not 1 <= len(self._images) <= MAX_IMAGES:
            self._error.show(NO_IMAGES_MESSAGE)
            return False

        images = self._images
        self._transcript.append(ConversationTurn(role="user", text=question))
        self._transcript.append(ConversationTurn(role="assistant", text=PENDING_TEXT, pending=True))
        pending_index = len(self._transcript) - 1

        self.state = SubmissionState.RESOLVING
        try:
            answer = await self.query_client.ask(question, images)
        except SubmissionError as e:
            logger.error(f"Submission failed: {e}")
            del self._transcript[pending_index]
            self._error.show(str(e))
            return False
        except Exception as e:
            logger.exception(f"Unexpected error while submitting: {e}")
            del self._transcript[pending_index]
            self._error.show(UNEXPECTED_ERROR_MESSAGE)
            return False
        finally:
            self.state = SubmissionState.IDLE

        self._transcript[pending_index] = ConversationTurn(role="assistant", text=answer)
        return True

    def close(self):
        self._previews.release_all()
