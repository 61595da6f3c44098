"""Invocation units and the per-page explorer views that own them."""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

from .executors import EndpointInvoker, InvocationError
from .models import (
    EndpointDescriptor,
    InvocationFailure,
    InvocationState,
    InvocationStatus,
)
from .openapi import DocumentLoader
from .session import ApiSession

logger = logging.getLogger(__name__)

MAX_VIEWS = 64


class UnitBusyError(Exception):
    pass


class InvocationUnit:
    """
    Stateful wrapper around one endpoint descriptor.

    State moves idle -> loading -> succeeded | failed, and any later send
    goes back through loading. The unit is never shared between descriptors.
    """

    def __init__(self, descriptor: EndpointDescriptor) -> None:
        self.descriptor = descriptor
        self.state = InvocationState()

    @property
    def busy(self) -> bool:
        return self.state.status is InvocationStatus.LOADING

    def set_param(self, name: str, value: str) -> None:
        self.state.param_values[name] = value

    async def send(self, invoker: EndpointInvoker, session: ApiSession) -> InvocationState:
        if self.busy:
            raise UnitBusyError(f"Request already in flight for {self.descriptor.key}")

        self.state.status = InvocationStatus.LOADING
        self.state.result = None
        self.state.failure = None

        try:
            result = await invoker.invoke(
                self.descriptor,
                self.state.param_values,
                session.api_url,
                session.api_key,
            )
        except InvocationError as exc:
            logger.error("Invocation failed: %s status=%s", self.descriptor.key, exc.status)
            self._fail(exc.status, exc.body)
            return self.state
        finally:
            # Never leave the unit loading once the call has returned or raised.
            if self.state.status is InvocationStatus.LOADING:
                self._fail(None, {"message": "Request did not complete"})

        self.state.result = result
        self.state.status = InvocationStatus.SUCCEEDED
        return self.state

    def _fail(self, status: Optional[int], body: Any) -> None:
        self.state.failure = InvocationFailure(status=status, body=body)
        self.state.status = InvocationStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        state = self.state.to_dict()
        for outcome in ("result", "error"):
            if state[outcome]:
                state[outcome]["category"] = status_category(state[outcome]["status"])
        return {
            **self.descriptor.to_dict(),
            "badge": method_badge(self.descriptor.method),
            "state": state,
        }


class ExplorerView:
    """Endpoints and units for one page load."""

    def __init__(self, view_id: str, endpoints: Tuple[EndpointDescriptor, ...]) -> None:
        self.view_id = view_id
        self.endpoints = endpoints
        self.units: List[InvocationUnit] = [InvocationUnit(d) for d in endpoints]

    def unit(self, index: int) -> InvocationUnit:
        if index < 0 or index >= len(self.units):
            raise LookupError(f"No endpoint at index {index}")
        return self.units[index]

    def snapshot(self) -> Dict[str, Any]:
        return {
            "view": self.view_id,
            "endpoints": [unit.to_dict() for unit in self.units],
        }


class ExplorerService:
    def __init__(
        self,
        loader: DocumentLoader,
        invoker: EndpointInvoker,
        session: ApiSession,
        document_url: str,
        max_views: int = MAX_VIEWS,
    ) -> None:
        self.loader = loader
        self.invoker = invoker
        self.session = session
        self.document_url = document_url
        self.max_views = max_views
        self._views: "OrderedDict[str, ExplorerView]" = OrderedDict()

    async def mount(self) -> ExplorerView:
        """Load the document once and build a new view with fresh units.

        A failed load raises DocumentLoadError and registers nothing; there
        is no partial list. Views mounted earlier are left untouched.
        """
        endpoints = await self.loader.load(self.document_url)
        view = ExplorerView(uuid.uuid4().hex, tuple(endpoints))
        self._views[view.view_id] = view
        while len(self._views) > self.max_views:
            dropped, _ = self._views.popitem(last=False)
            logger.info("Discarding view %s", dropped)
        return view

    def view(self, view_id: str) -> ExplorerView:
        try:
            return self._views[view_id]
        except KeyError:
            raise LookupError(f"No view {view_id}") from None

    def unmount(self, view_id: str) -> None:
        self._views.pop(view_id, None)

    async def send(self, view_id: str, index: int, params: Dict[str, str]) -> InvocationUnit:
        unit = self.view(view_id).unit(index)
        if unit.busy:
            raise UnitBusyError(f"Request already in flight for {unit.descriptor.key}")
        for name, value in params.items():
            unit.set_param(name, value)
        await unit.send(self.invoker, self.session)
        return unit


def status_category(status: Optional[int]) -> str:
    if status is None:
        return "unknown"
    if 200 <= status < 300:
        return "success"
    if 400 <= status < 500:
        return "client-error"
    if status >= 500:
        return "server-error"
    return "unknown"


def method_badge(method: str) -> str:
    return method.upper()
