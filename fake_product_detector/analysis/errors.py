from __future__ import annotations

from typing import Tuple


class AnalysisError(Exception):
    """Failure that is reported to the caller as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingImage(AnalysisError):
    status_code = 400

    def __init__(self, message: str = "No image provided") -> None:
        super().__init__(message)


class ImageTooLarge(AnalysisError):
    status_code = 400

    def __init__(self, max_bytes: int) -> None:
        limit_mb = max_bytes // (1024 * 1024)
        super().__init__(
            f"Image too large. Please use an image smaller than {limit_mb}MB."
        )
        self.max_bytes = max_bytes


class ProviderNotConfigured(AnalysisError):
    status_code = 500

    def __init__(self, api_key_env: str) -> None:
        super().__init__(
            "OpenAI API key is not configured. "
            f"Please add {api_key_env} to your environment variables."
        )
        self.api_key_env = api_key_env


class ProviderError(AnalysisError):
    """The provider call failed or returned no usable text."""


class UnexpectedFailure(AnalysisError):
    pass


def classify_failure(exc: BaseException) -> Tuple[int, str]:
    text = str(exc)
    lowered = text.lower()
    if "api key" in lowered:
        return 401, "OpenAI API key is invalid or missing"
    if "quota" in lowered:
        return 429, "OpenAI API quota exceeded"
    if "rate limit" in lowered:
        return 429, "Rate limit exceeded. Please try again later."
    return 500, f"Analysis failed: {text}"
