"""Execution layer for live endpoint requests."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from .logging import redact_headers
from .models import EndpointDescriptor, InvocationResult

logger = logging.getLogger(__name__)


class InvocationError(Exception):
    def __init__(self, status: Optional[int], body: Any) -> None:
        super().__init__(f"Request failed (status={status})")
        self.status = status
        self.body = body


class EndpointInvoker:
    def __init__(
        self,
        timeout_seconds: float = 30,
        verify_ssl: bool = True,
        api_key_header: str = "apikey",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.verify_ssl = verify_ssl
        self.api_key_header = api_key_header
        self.transport = transport

    async def invoke(
        self,
        descriptor: EndpointDescriptor,
        param_values: Mapping[str, str],
        base_url: str,
        api_key: str,
    ) -> InvocationResult:
        """Send one request for ``descriptor``.

        Any response that comes back is a result, whatever its status code.
        Only transport-level failures raise :class:`InvocationError`.
        """
        url = self.build_url(base_url, self.build_path(descriptor, param_values))
        headers = {self.api_key_header: api_key}
        method = descriptor.method.upper()

        logger.info("Dispatching %s %s headers=%s", method, url, redact_headers(headers))
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                verify=self.verify_ssl,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.request(method, url, headers=headers)
        except httpx.HTTPStatusError as exc:
            logger.warning("Request rejected: %s %s (%s)", method, url, exc.response.status_code)
            raise InvocationError(exc.response.status_code, decode_body(exc.response)) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Request failed: %s %s (%s)", method, url, exc)
            raise InvocationError(None, {"message": str(exc) or exc.__class__.__name__}) from exc
        except Exception as exc:
            logger.warning("Request could not be sent: %s %s (%r)", method, url, exc)
            raise InvocationError(None, {"message": str(exc) or exc.__class__.__name__}) from exc

        logger.info("Received %s for %s %s", response.status_code, method, url)
        return InvocationResult(status=response.status_code, body=decode_body(response))

    def build_path(self, descriptor: EndpointDescriptor, param_values: Mapping[str, str]) -> str:
        path = descriptor.path
        for name in descriptor.param_names:
            path = path.replace(f"{{{name}}}", param_values.get(name) or "")
        return path

    def build_url(self, base_url: str, path: str) -> str:
        if not base_url:
            return path
        if not path:
            return base_url
        return base_url.rstrip("/") + "/" + path.lstrip("/")


def decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text

