"""HTTP app setup for the API Explorer."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from .config import Settings
from .executors import EndpointInvoker
from .openapi import DocumentLoader, DocumentLoadError
from .service import ExplorerService, UnitBusyError
from .session import ApiSession
from .ui import EXPLORER_HTML

logger = logging.getLogger(__name__)


class InvokeRequest(BaseModel):
    params: Dict[str, str] = Field(default_factory=dict)


def build_service(settings: Settings) -> ExplorerService:
    loader = DocumentLoader(
        timeout_seconds=settings.explorer_timeout_seconds,
        verify_ssl=settings.explorer_verify_ssl,
    )
    invoker = EndpointInvoker(
        timeout_seconds=settings.explorer_timeout_seconds,
        verify_ssl=settings.explorer_verify_ssl,
        api_key_header=settings.explorer_api_key_header,
    )
    session = ApiSession.from_settings(settings)
    if not session.is_configured():
        logger.warning("EXPLORER_API_URL is not set; requests will use bare paths")
    return ExplorerService(loader, invoker, session, settings.explorer_document_url)


def build_app(settings: Settings, service: Optional[ExplorerService] = None) -> Starlette:
    service = service or build_service(settings)

    async def index(_request: Request) -> HTMLResponse:
        return HTMLResponse(EXPLORER_HTML)

    async def list_endpoints(_request: Request) -> JSONResponse:
        try:
            view = await service.mount()
        except DocumentLoadError as exc:
            return JSONResponse({"error": str(exc)}, status_code=502)
        return JSONResponse(view.snapshot())

    async def invoke_endpoint(request: Request) -> JSONResponse:
        view_id = request.path_params["view_id"]
        index = request.path_params["index"]
        try:
            payload = InvokeRequest.model_validate(await request.json())
        except ValidationError as exc:
            return JSONResponse(
                {"error": "Invalid payload", "details": exc.errors(include_url=False, include_context=False)},
                status_code=422,
            )
        except ValueError:
            return JSONResponse({"error": "Invalid payload"}, status_code=422)

        try:
            unit = await service.send(view_id, index, payload.params)
        except LookupError:
            return JSONResponse({"error": "Not found"}, status_code=404)
        except UnitBusyError as exc:
            return JSONResponse({"error": str(exc)}, status_code=409)
        return JSONResponse(unit.to_dict())

    async def unmount_view(request: Request) -> JSONResponse:
        service.unmount(request.path_params["view_id"])
        return JSONResponse({"status": "deleted"})

    async def healthcheck(_request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app = Starlette(
        routes=[
            Route("/", index, methods=["GET"]),
            Route("/api/endpoints", list_endpoints, methods=["GET"]),
            Route(
                "/api/views/{view_id}/endpoints/{index:int}/invoke",
                invoke_endpoint,
                methods=["POST"],
            ),
            Route("/api/views/{view_id}", unmount_view, methods=["DELETE"]),
            Route("/health", healthcheck, methods=["GET"]),
        ]
    )
    app.state.service = service
    _attach_cors(app)
    return app


def _attach_cors(app: Starlette) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
