"""Endpoint descriptors and per-unit invocation state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class EndpointDescriptor:
    method: str
    path: str
    description: str = ""
    param_names: Tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.method}-{self.path}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "method": self.method,
            "path": self.path,
            "description": self.description,
            "params": list(self.param_names),
        }


class InvocationStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class InvocationResult:
    status: int
    body: Any


@dataclass(frozen=True)
class InvocationFailure:
    status: Optional[int]
    body: Any


@dataclass
class InvocationState:
    param_values: Dict[str, str] = field(default_factory=dict)
    status: InvocationStatus = InvocationStatus.IDLE
    result: Optional[InvocationResult] = None
    failure: Optional[InvocationFailure] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "params": dict(self.param_values),
            "status": self.status.value,
            "result": (
                {"status": self.result.status, "data": self.result.body} if self.result else None
            ),
            "error": (
                {"status": self.failure.status, "data": self.failure.body}
                if self.failure
                else None
            ),
        }
