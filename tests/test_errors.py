import pytest

from fake_product_detector.analysis.errors import (
    ImageTooLarge,
    MissingImage,
    ProviderError,
    ProviderNotConfigured,
    classify_failure,
)


@pytest.mark.parametrize(
    "message, status, text",
    [
        ("Incorrect API key provided", 401, "OpenAI API key is invalid or missing"),
        ("You exceeded your current quota", 429, "OpenAI API quota exceeded"),
        ("Rate limit reached", 429, "Rate limit exceeded. Please try again later."),
        ("socket closed", 500, "Analysis failed: socket closed"),
    ],
)
def test_classify_failure(message, status, text):
    assert classify_failure(ProviderError(message)) == (status, text)


def test_error_status_codes():
    assert MissingImage().status_code == 400
    assert ImageTooLarge(20 * 1024 * 1024).status_code == 400
    assert ProviderNotConfigured("OPENAI_API_KEY").status_code == 500
    assert ProviderError("x").status_code == 500


def test_error_messages_are_user_facing():
    assert "20MB" in ImageTooLarge(20 * 1024 * 1024).message
    assert "OPENAI_API_KEY" in ProviderNotConfigured("OPENAI_API_KEY").message
