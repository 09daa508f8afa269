"""Tests for the FastAPI app entry point and startup checks."""
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient


def test_health_endpoint_returns_200() -> None:
    """Health check endpoint should return HTTP 200."""
    from cardgen.main import app
    client = TestClient(app)
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_app_has_correct_title() -> None:
    from cardgen.main import app
    assert app.title == "Greeting Card Generator"


def test_app_has_cors_middleware() -> None:
    """App should allow cross-origin requests from the card frontend."""
    from cardgen.main import app
    from starlette.middleware.cors import CORSMiddleware
    middleware_classes = [m.cls for m in app.user_middleware]
    assert CORSMiddleware in middleware_classes


def test_lifespan_initializes_card_service() -> None:
    """Startup builds a CardService backed by the Gemini client."""
    from cardgen.main import app
    from cardgen.services.card import CardService
    from cardgen.services.image import GeminiImageClient

    with TestClient(app):
        svc = app.state.card_service
        assert isinstance(svc, CardService)
        assert isinstance(svc.provider, GeminiImageClient)
        assert svc.default_model == "gemini-2.5-flash-image"
    assert not hasattr(app.state, "card_service")


def test_lifespan_closes_provider_on_shutdown() -> None:
    """Shutdown releases the genai async transport."""
    from cardgen.main import app
    from cardgen.services.image import GeminiImageClient

    with patch.object(GeminiImageClient, "close", new_callable=AsyncMock) as close:
        with TestClient(app):
            close.assert_not_awaited()
    close.assert_awaited_once()


def test_lifespan_fails_on_blank_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """A blank API key aborts startup."""
    from cardgen.main import app
    from cardgen.services.image import ConfigurationError

    monkeypatch.setenv("GOOGLE_API_KEY", "")
    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass


def test_main_exits_without_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """The console entry point exits with status 1 before serving."""
    from cardgen import main as main_module

    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.chdir("/")  # no .env file to fall back on
    with patch("uvicorn.run") as run:
        with pytest.raises(SystemExit) as exc_info:
            main_module.main()
    assert exc_info.value.code == 1
    run.assert_not_called()


def test_main_runs_uvicorn_with_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from cardgen import main as main_module

    monkeypatch.setenv("PORT", "4321")
    monkeypatch.delenv("BACKEND_PORT", raising=False)
    with patch("uvicorn.run") as run:
        main_module.main()
    assert run.call_args.kwargs["port"] == 4321


def test_main_reports_invalid_setting(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """A bad PORT with a valid key is reported as invalid configuration, not a missing key."""
    from cardgen import main as main_module

    monkeypatch.delenv("BACKEND_PORT", raising=False)
    monkeypatch.setenv("PORT", "abc")
    with patch("uvicorn.run") as run:
        with pytest.raises(SystemExit) as exc_info:
            main_module.main()
    assert exc_info.value.code == 1
    run.assert_not_called()
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Invalid configuration:") for m in messages)
    assert not any("GOOGLE_API_KEY not set" in m for m in messages)


def test_main_reports_missing_api_key(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    from cardgen import main as main_module

    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.chdir("/")
    with patch("uvicorn.run"):
        with pytest.raises(SystemExit):
            main_module.main()
    assert any("GOOGLE_API_KEY not set" in r.getMessage() for r in caplog.records)
