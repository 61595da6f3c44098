from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from api_explorer.executors import EndpointInvoker
from api_explorer.openapi import DocumentLoader
from api_explorer.service import ExplorerService
from api_explorer.session import ApiSession

FIXTURES = Path(__file__).parent / "fixtures"

DOC_URL = "http://docs.test/swagger/doc.json"
API_URL = "http://api.test"
API_KEY = "secret-key"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def evolution_doc() -> dict[str, Any]:
    return json.loads((FIXTURES / "evolution.json").read_text(encoding="utf-8"))


@pytest.fixture()
def session() -> ApiSession:
    return ApiSession(api_url=API_URL, api_key=API_KEY)


def make_loader(handler: Handler) -> DocumentLoader:
    return DocumentLoader(transport=httpx.MockTransport(handler))


def make_invoker(handler: Handler) -> EndpointInvoker:
    return EndpointInvoker(transport=httpx.MockTransport(handler))


def make_service(doc_handler: Handler, api_handler: Handler, session: ApiSession) -> ExplorerService:
    return ExplorerService(make_loader(doc_handler), make_invoker(api_handler), session, DOC_URL)
