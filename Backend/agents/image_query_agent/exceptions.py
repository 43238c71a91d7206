"""Errors raised by the Model Gateway. The route maps all of them to HTTP 500."""


class ImageQueryError(Exception):
    """Base class for failures while answering a question about an image."""


class ConfigurationError(ImageQueryError):
    """Live mode was selected but no OpenAI credential is configured."""


class UpstreamError(ImageQueryError):
    """The vision model call failed or returned a non-success status."""
