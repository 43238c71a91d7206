from enum import Enum

from config.settings import Settings


class Mode(str, Enum):
    """Selects the Model Gateway behaviour for the whole process."""
    MOCK = "MOCK"
    LIVE = "LIVE"


def resolve_mode(settings: Settings) -> Mode:
    """
    Decide between mock and live answering.

    Mock is used when MOCK_OPENAI is set or when running in the development
    environment, so local runs never need an OpenAI key.
    """
    if settings.MOCK_OPENAI or settings.ENVIRONMENT.lower() == "development":
        return Mode.MOCK
    return Mode.LIVE
