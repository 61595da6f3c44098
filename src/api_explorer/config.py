"""Configuration for the API Explorer."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DOCUMENT_URL = "http://evolgo.fragenciamarketingdigital.com.br/swagger/doc.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    service_name: str = Field(default="api-explorer")

    explorer_document_url: str = Field(default=DEFAULT_DOCUMENT_URL)

    explorer_api_url: str = Field(default="")
    explorer_api_key: str = Field(default="")
    explorer_api_key_header: str = Field(default="apikey")
    explorer_timeout_seconds: float = Field(default=30)
    explorer_verify_ssl: bool = Field(default=True)

    explorer_host: str = Field(default="127.0.0.1")
    explorer_port: int = Field(default=8080)

    explorer_log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
