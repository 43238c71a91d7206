import time
from typing import Callable, Optional


class TransientMessage:
    """A user-visible message that clears itself ``ttl`` seconds after it was set."""

    def __init__(self, ttl: float = 10.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._text: Optional[str] = None
        self._shown_at = 0.0

    def show(self, text: str):
        self._text = text
        self._shown_at = self._clock()

    def clear(self):
        self._text = None

    @property
    def text(self) -> Optional[str]:
        if self._text is not None and self._clock() - self._shown_at >= self.ttl:
            self._text = None
        return self._text
