"""
Ordered route bindings and the gate pipeline.

A binding ties a path prefix to an ordered tuple of gates and the router that
owns everything beneath the prefix. Bindings are matched in declaration order
(first match wins) and the table is frozen once the app is assembled.

Gates are async callables returning a `GateResult`: either `CONTINUE` or a
short-circuit carrying the response to send. `GatePipelineMiddleware` walks the
matched binding's gates and stops at the first short-circuit.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Optional, Protocol, Tuple

from fastapi import APIRouter, FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from core.api.errors import error_handler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateResult:
    response: Optional[Response] = None

    @property
    def short_circuited(self) -> bool:
        return self.response is not None


CONTINUE = GateResult()


def short_circuit(response: Response) -> GateResult:
    return GateResult(response=response)


class Gate(Protocol):
    """Request-inspection step run before a binding's handler.

    `provides_identity` marks gates that populate `request.state.user`;
    `requires_identity` marks gates that read it.
    """

    name: str
    provides_identity: bool
    requires_identity: bool

    def __call__(self, request: Request) -> Awaitable[GateResult]: ...


def normalize_prefix(prefix: str) -> str:
    if not prefix or not prefix.startswith("/"):
        raise ValueError(f"Route prefix must start with '/': {prefix!r}")
    normalized = prefix.rstrip("/")
    if not normalized:
        raise ValueError("Route prefix must not be the root path")
    return normalized


@dataclass(frozen=True)
class RouteBinding:
    prefix: str
    gates: Tuple[Gate, ...]
    handler: APIRouter

    def matches(self, path: str) -> bool:
        return path == self.prefix or path.startswith(self.prefix + "/")

    @property
    def gate_names(self) -> Tuple[str, ...]:
        return tuple(getattr(g, "name", type(g).__name__) for g in self.gates)


def _check_gate_order(prefix: str, gates: Tuple[Gate, ...]) -> None:
    identity_ready = False
    for gate in gates:
        if getattr(gate, "requires_identity", False) and not identity_ready:
            raise ValueError(
                f"Gate '{getattr(gate, 'name', gate)}' on {prefix} needs an authenticated "
                "identity and must be mounted after an identity-providing gate"
            )
        if getattr(gate, "provides_identity", False):
            identity_ready = True


class RouteTable:
    """Ordered, freezable table of route bindings."""

    def __init__(self) -> None:
        self._bindings: list[RouteBinding] = []
        self._frozen = False

    @property
    def bindings(self) -> Tuple[RouteBinding, ...]:
        return tuple(self._bindings)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def mount(self, prefix: str, *gates: Gate, handler: APIRouter) -> RouteBinding:
        """Register a binding; declaration order defines matching precedence.

        Raises:
            RuntimeError: if the table is frozen.
            ValueError: for a malformed or duplicate prefix, or a gate that
                needs an identity mounted before any gate provides one.
        """
        if self._frozen:
            raise RuntimeError("Route table is frozen; bindings cannot change after startup")
        prefix = normalize_prefix(prefix)
        if any(b.prefix == prefix for b in self._bindings):
            raise ValueError(f"Route prefix already mounted: {prefix}")
        gates = tuple(gates)
        _check_gate_order(prefix, gates)
        binding = RouteBinding(prefix=prefix, gates=gates, handler=handler)
        self._bindings.append(binding)
        return binding

    def match(self, path: str) -> Optional[RouteBinding]:
        for binding in self._bindings:
            if binding.matches(path):
                return binding
        return None

    def freeze(self) -> None:
        self._frozen = True

    def install(self, app: FastAPI) -> None:
        """Include every bound router in the app and freeze the table."""
        for binding in self._bindings:
            app.include_router(binding.handler, prefix=binding.prefix)
        self.freeze()


async def run_gates(binding: RouteBinding, request: Request) -> GateResult:
    for gate in binding.gates:
        result = await gate(request)
        if result.short_circuited:
            logger.info(
                "gate_short_circuit: gate=%s path=%s status=%s",
                getattr(gate, "name", gate), request.url.path, result.response.status_code,
            )
            return result
    return CONTINUE


class GatePipelineMiddleware(BaseHTTPMiddleware):
    """Run the gate chain of the binding matching each request path."""

    def __init__(self, app, table: RouteTable):
        super().__init__(app)
        self.table = table

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        binding = self.table.match(request.url.path)
        # Errors are rendered here, inside CORS, so error responses keep CORS headers
        try:
            if binding is not None and binding.gates:
                result = await run_gates(binding, request)
                if result.short_circuited:
                    return result.response
            return await call_next(request)
        except Exception as exc:
            return await error_handler(request, exc)


__all__ = [
    "CONTINUE",
    "Gate",
    "GateResult",
    "GatePipelineMiddleware",
    "RouteBinding",
    "RouteTable",
    "run_gates",
    "short_circuit",
]
