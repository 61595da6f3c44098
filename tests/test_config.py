from __future__ import annotations

from api_explorer.config import DEFAULT_DOCUMENT_URL, Settings
from api_explorer.server import build_service
from api_explorer.session import ApiSession


def test_defaults() -> None:
    settings = Settings()

    assert settings.explorer_document_url == DEFAULT_DOCUMENT_URL
    assert settings.explorer_api_key_header == "apikey"


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("EXPLORER_API_URL", "https://api.example.com")
    monkeypatch.setenv("EXPLORER_API_KEY", "k-123")
    monkeypatch.setenv("EXPLORER_PORT", "9000")

    settings = Settings()

    assert settings.explorer_api_url == "https://api.example.com"
    assert settings.explorer_port == 9000
    assert ApiSession.from_settings(settings) == ApiSession(
        api_url="https://api.example.com", api_key="k-123"
    )


def test_session_is_configured() -> None:
    assert ApiSession(api_url="http://api.test", api_key="").is_configured()
    assert not ApiSession(api_url="", api_key="k").is_configured()


def test_build_service_wires_settings() -> None:
    settings = Settings(
        explorer_api_url="http://api.test",
        explorer_api_key="k",
        explorer_api_key_header="X-Key",
        explorer_document_url="http://docs.test/doc.json",
    )

    service = build_service(settings)

    assert service.document_url == "http://docs.test/doc.json"
    assert service.invoker.api_key_header == "X-Key"
    assert service.session == ApiSession(api_url="http://api.test", api_key="k")
