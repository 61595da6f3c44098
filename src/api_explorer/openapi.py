"""OpenAPI document loader and endpoint extraction."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .models import EndpointDescriptor


logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load API documentation."


class DocumentLoadError(Exception):
    """Raised when the endpoint document cannot be fetched or read.

    The message is always the same coarse text shown on the page; the
    underlying exception is chained and kept on ``cause`` for logs.
    """

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        super().__init__(LOAD_ERROR_MESSAGE)
        self.cause = cause


class DocumentLoader:
    def __init__(
        self,
        timeout_seconds: float = 30,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.verify_ssl = verify_ssl
        self.transport = transport

    async def load(self, url: str) -> List[EndpointDescriptor]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                verify=self.verify_ssl,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                document = response.json()
            endpoints = extract_endpoints(document)
        except Exception as exc:
            logger.warning("Failed to load OpenAPI document: %s (%s)", url, exc)
            raise DocumentLoadError(exc) from exc

        logger.info("Loaded %s endpoints from %s", len(endpoints), url)
        return endpoints


def extract_endpoints(document: Dict[str, Any]) -> List[EndpointDescriptor]:
    endpoints: List[EndpointDescriptor] = []
    paths = document.get("paths") or {}

    for path, methods in paths.items():
        if not isinstance(methods, dict):
            continue
        for method, operation in methods.items():
            if not isinstance(operation, dict):
                continue
            endpoints.append(
                EndpointDescriptor(
                    method=method,
                    path=path,
                    description=operation.get("summary") or operation.get("description") or "",
                    param_names=_path_param_names(operation.get("parameters")),
                )
            )

    return endpoints


def _path_param_names(parameters: Optional[List[Dict[str, Any]]]) -> tuple[str, ...]:
    # Document order, duplicates kept.
    return tuple(
        parameter["name"]
        for parameter in parameters or []
        if isinstance(parameter, dict)
        and parameter.get("in") == "path"
        and parameter.get("name")
    )
