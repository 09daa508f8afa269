"""Shared test fixtures and configuration."""
from typing import Iterator

import pytest
from google.genai import types


@pytest.fixture(autouse=True)
def set_required_env_vars(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Set the Gemini API key for all tests and reset cached settings."""
    from cardgen.core.config import get_settings

    monkeypatch.setenv("GOOGLE_API_KEY", "test-api-key")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_response(*parts: types.Part) -> types.GenerateContentResponse:
    """Build a provider response whose first candidate holds ``parts``."""
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


def image_part(data: bytes = b"\x89PNG-fake", mime_type: str = "image/png") -> types.Part:
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))


def text_part(text: str = "Here is your card") -> types.Part:
    return types.Part(text=text)
