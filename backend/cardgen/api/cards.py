"""Card generation API router."""
import logging
from typing import Awaitable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from cardgen.models.card import (
    CardRequest,
    EditRequest,
    GenerateRequest,
    GenerationResult,
    HealthResponse,
    OccasionSummary,
)
from cardgen.services.card import CardService, CardServiceError, ServiceUnavailableError
from cardgen.services.occasions import available_occasions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["cards"])

READY_MESSAGE = "Greeting Card Generator ready"


def get_card_service(request: Request) -> CardService:
    """FastAPI dependency: retrieve CardService from app.state.

    Raises ServiceUnavailableError (HTTP 503) if the service was not
    initialized at startup.
    """
    svc: CardService | None = getattr(request.app.state, "card_service", None)
    if svc is None:
        raise ServiceUnavailableError("Image provider unavailable. Service not initialized.")
    return svc


def error_response(status_code: int, message: str) -> JSONResponse:
    """Serialize a failed GenerationResult with the given status code."""
    body = GenerationResult(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _respond(call: Awaitable[str]) -> GenerationResult | JSONResponse:
    try:
        image = await call
    except CardServiceError as exc:
        return error_response(exc.status_code, exc.message)
    return GenerationResult(success=True, image=image)


@router.post(
    "/generate-card",
    response_model=GenerationResult,
    response_model_exclude_none=True,
)
async def generate_card(
    body: CardRequest,
    service: CardService = Depends(get_card_service),
) -> GenerationResult | JSONResponse:
    """Generate a greeting card from a selfie.

    Raises:
        400: selfieBase64 missing.
        500: provider failure or no image in the response.
    """
    return await _respond(service.generate_card(body))


@router.post(
    "/edit-card",
    response_model=GenerationResult,
    response_model_exclude_none=True,
)
async def edit_card(
    body: EditRequest,
    service: CardService = Depends(get_card_service),
) -> GenerationResult | JSONResponse:
    """Edit an existing card image according to free-text instructions."""
    return await _respond(service.edit_card(body))


@router.post(
    "/generate",
    response_model=GenerationResult,
    response_model_exclude_none=True,
)
async def generate(
    body: GenerateRequest,
    service: CardService = Depends(get_card_service),
) -> GenerationResult | JSONResponse:
    """Legacy text-to-image endpoint, kept for compatibility."""
    return await _respond(service.generate_image(body))


@router.get("/occasions", response_model=list[OccasionSummary], response_model_by_alias=True)
async def list_occasions() -> list[OccasionSummary]:
    """List the occasion keys accepted by /api/generate-card."""
    return available_occasions()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint. Always returns HTTP 200."""
    logger.debug("Health check requested")
    return HealthResponse(status="ok", model=READY_MESSAGE)
