"""CardService: orchestrates one generation request."""
import logging
from typing import Optional

from google.genai import types

from cardgen.models.card import CardRequest, EditRequest, GenerateRequest
from cardgen.services.image import CARD_ASPECT_RATIO, ImageProvider, extract_image
from cardgen.services.occasions import lookup
from cardgen.services.prompt import build_card_prompt, build_edit_prompt

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "No image generated"


class CardServiceError(Exception):
    """Base error carrying the HTTP status and client-facing message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingFieldError(CardServiceError):
    """A required request field is missing or empty. No provider call was made."""

    status_code = 400


class ImageGenerationError(CardServiceError):
    """The provider call (or decoding its input) failed."""


class NoImageGeneratedError(CardServiceError):
    """The provider answered but returned no inline image part."""

    def __init__(self, message: str = NO_IMAGE_MESSAGE) -> None:
        super().__init__(message)


class ServiceUnavailableError(CardServiceError):
    """CardService was not initialized at startup."""

    status_code = 503


class CardService:
    """Validates requests, builds prompts, calls the image provider.

    Every method runs one pass of
    validate -> call provider -> extract image, and returns the generated
    image as a data URI or raises a CardServiceError subclass.
    """

    def __init__(self, provider: ImageProvider, default_model: str) -> None:
        self.provider = provider
        self.default_model = default_model

    async def generate_card(self, request: CardRequest) -> str:
        """Generate a greeting card from a selfie."""
        if not request.selfie_base64:
            raise MissingFieldError("Photo is required")

        config = lookup(request.occasion)
        model = request.model or self.default_model
        logger.info(
            "Generating %s card for %s (model=%s)",
            config.name,
            request.recipient_name or "recipient",
            model,
        )
        prompt = build_card_prompt(
            config,
            recipient_name=request.recipient_name,
            sender_name=request.sender_name,
            greeting=request.greeting,
            custom_instructions=request.custom_instructions,
        )
        return await self._run(
            request.selfie_base64,
            prompt,
            model,
            CARD_ASPECT_RATIO,
            fallback_error="Failed to generate card",
        )

    async def edit_card(self, request: EditRequest) -> str:
        """Apply edit instructions to a previously generated card."""
        if not request.card_base64:
            raise MissingFieldError("Card image is required")
        if not request.edit_instructions:
            raise MissingFieldError("Edit instructions are required")

        model = request.model or self.default_model
        logger.info("Editing card: %r (model=%s)", request.edit_instructions[:50], model)
        return await self._run(
            request.card_base64,
            build_edit_prompt(request.edit_instructions),
            model,
            CARD_ASPECT_RATIO,
            fallback_error="Failed to edit card",
        )

    async def generate_image(self, request: GenerateRequest) -> str:
        """Legacy text-to-image passthrough."""
        if not request.prompt:
            raise MissingFieldError("Prompt is required")

        model = request.model or self.default_model
        logger.info(
            "Generating image: %r (model=%s, aspect=%s)",
            request.prompt[:50],
            model,
            request.aspect_ratio,
        )
        return await self._run(
            None,
            request.prompt,
            model,
            request.aspect_ratio,
            fallback_error="Failed to generate image",
        )

    async def _run(
        self,
        image: Optional[str],
        prompt: str,
        model: str,
        aspect_ratio: str,
        fallback_error: str,
    ) -> str:
        try:
            response: types.GenerateContentResponse = await self.provider.generate(
                image, prompt, model, aspect_ratio
            )
        except Exception as exc:
            logger.error(
                "Image provider call failed: %s",
                exc,
                exc_info=True,
                extra={"service": "CardService", "error_type": type(exc).__name__},
            )
            raise ImageGenerationError(str(exc) or fallback_error) from exc

        image_uri = extract_image(response)
        if image_uri is None:
            logger.error(
                "No image in response",
                extra={"service": "CardService", "error_type": "NoImageGenerated"},
            )
            raise NoImageGeneratedError()

        logger.info("Image generated successfully (model=%s)", model)
        return image_uri
