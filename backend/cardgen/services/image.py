"""Gemini image API client and response extraction."""
import base64
import binascii
import logging
import re
from typing import Optional, Protocol

from google import genai
from google.genai import types

from cardgen.core.config import Settings

logger = logging.getLogger(__name__)

CARD_ASPECT_RATIO = "2:1"
DEFAULT_MIME_TYPE = "image/png"

_DATA_URI_PREFIX = re.compile(r"^data:(image/[\w.+-]+);base64,")


class ConfigurationError(RuntimeError):
    """Raised at startup when the provider cannot be configured."""


class InvalidImageError(ValueError):
    """Raised when an uploaded image payload is not valid base64."""


class ImageProvider(Protocol):
    """Anything that can send an (optional) image plus a prompt to an image model."""

    async def generate(
        self,
        image: Optional[str],
        prompt: str,
        model: str,
        aspect_ratio: str,
    ) -> types.GenerateContentResponse: ...


def decode_image_payload(payload: str) -> tuple[bytes, str]:
    """Decode a base64 image, with or without a ``data:image/...;base64,`` header.

    Returns:
        Raw image bytes and the mime type declared in the header
        (``image/png`` when there is none).

    Raises:
        InvalidImageError: When the payload is not valid base64.
    """
    mime_type = DEFAULT_MIME_TYPE
    match = _DATA_URI_PREFIX.match(payload)
    if match:
        mime_type = match.group(1)
        payload = payload[match.end():]
    # MIME-style base64 wraps lines every 76 characters
    payload = "".join(payload.split())
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageError(f"Invalid base64 image data: {exc}") from exc


def extract_image(response: types.GenerateContentResponse) -> Optional[str]:
    """Return the first inline image in ``response`` as a data URI, or None."""
    candidates = response.candidates or []
    content = candidates[0].content if candidates else None
    parts = (content.parts if content is not None else None) or []

    inline = next(
        (
            part.inline_data
            for part in parts
            if getattr(part, "inline_data", None) is not None and part.inline_data.data
        ),
        None,
    )
    if inline is None:
        return None
    mime_type = inline.mime_type or DEFAULT_MIME_TYPE
    data = base64.b64encode(inline.data).decode("ascii")
    return f"data:{mime_type};base64,{data}"


class GeminiImageClient:
    """Sends image generation requests to the Gemini API (google-genai)."""

    def __init__(self, api_key: str, client: Optional[genai.Client] = None) -> None:
        self._client = client if client is not None else genai.Client(api_key=api_key)

    async def generate(
        self,
        image: Optional[str],
        prompt: str,
        model: str,
        aspect_ratio: str,
    ) -> types.GenerateContentResponse:
        """Call ``generate_content`` once with image-only output.

        Args:
            image: Base64 image (data URI header allowed), or None for a
                text-only request.
            prompt: Instruction text.
            model: Gemini model id.
            aspect_ratio: Requested output aspect ratio, e.g. "2:1".

        Returns:
            The raw provider response. Provider errors propagate unchanged.
        """
        if image is not None:
            image_bytes, mime_type = decode_image_payload(image)
            contents: object = [
                types.Part(inline_data=types.Blob(data=image_bytes, mime_type=mime_type)),
                types.Part(text=prompt),
            ]
        else:
            contents = prompt

        logger.debug("generate_content: model=%s aspect_ratio=%s", model, aspect_ratio)
        return await self._client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=types.GenerateContentConfig(
                response_modalities=["IMAGE"],
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
            ),
        )

    async def close(self) -> None:
        """Release the async HTTP transport held by the genai client."""
        await self._client.aio.aclose()


def create_image_client(settings: Settings) -> GeminiImageClient:
    """Build the provider client, failing fast when no API key is configured.

    Raises:
        ConfigurationError: GOOGLE_API_KEY is blank.
    """
    api_key = settings.google_api_key.strip()
    if not api_key:
        raise ConfigurationError(
            "GOOGLE_API_KEY is not set. Add your API key from "
            "https://aistudio.google.com/apikey to the environment or .env file."
        )
    return GeminiImageClient(api_key=api_key)
