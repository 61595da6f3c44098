"""Session details for outbound endpoint requests."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Settings


@dataclass(frozen=True)
class ApiSession:
    api_url: str
    api_key: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApiSession":
        return cls(api_url=settings.explorer_api_url, api_key=settings.explorer_api_key)

    def is_configured(self) -> bool:
        return bool(self.api_url)
