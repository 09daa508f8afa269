"""FastAPI application entry point."""
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cardgen.core.config import get_settings
from cardgen.core.logging import setup_logging
from cardgen.services.card import CardServiceError

# Parent logger for every cardgen.* module
logger = setup_logging("cardgen")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the provider client and CardService before serving requests.

    A missing API key is fatal: the exception propagates and the server
    refuses to start.
    """
    from cardgen.services.card import CardService
    from cardgen.services.image import create_image_client

    try:
        settings = get_settings()
        provider = create_image_client(settings)
    except Exception as exc:
        logger.error(
            "Service initialization failed",
            exc_info=True,
            extra={"service": "main", "error_type": type(exc).__name__},
        )
        raise

    app.state.card_service = CardService(
        provider=provider,
        default_model=settings.default_model,
    )
    logger.info("Services initialized (default model: %s)", settings.default_model)

    try:
        yield
    finally:
        await provider.close()
        del app.state.card_service


# Create FastAPI app
app = FastAPI(
    title="Greeting Card Generator",
    description="Turns selfies into occasion greeting cards with Gemini image models",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies in the same envelope as other errors."""
    logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request body"},
    )


# Register routers
from cardgen.api.cards import error_response, router as cards_router  # noqa: E402

app.include_router(cards_router)


@app.exception_handler(CardServiceError)
async def card_service_exception_handler(
    request: Request, exc: CardServiceError
) -> JSONResponse:
    """Errors raised outside the route bodies, e.g. by dependencies."""
    return error_response(exc.status_code, exc.message)


def main() -> None:
    """Console entry point: check configuration, then serve with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except ValidationError as exc:
        if any(err["loc"][:1] == ("google_api_key",) for err in exc.errors()):
            logger.error(
                "GOOGLE_API_KEY not set. Copy .env.example to .env and add your API key "
                "from https://aistudio.google.com/apikey",
                extra={"service": "main", "error_type": "ConfigurationError"},
            )
        else:
            logger.error(
                "Invalid configuration: %s",
                "; ".join(
                    f"{'.'.join(map(str, err['loc']))}: {err['msg']}"
                    for err in exc.errors()
                ),
                extra={"service": "main", "error_type": "ConfigurationError"},
            )
        sys.exit(1)
    if not settings.google_api_key.strip():
        logger.error(
            "GOOGLE_API_KEY is empty. Add your API key from https://aistudio.google.com/apikey",
            extra={"service": "main", "error_type": "ConfigurationError"},
        )
        sys.exit(1)

    logger.info(
        "Server running at http://%s:%d", settings.backend_host, settings.backend_port
    )
    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port, log_config=None)


if __name__ == "__main__":
    main()
