"""Request pipeline that runs the fault injector ahead of every handler."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.routing import Match
from starlette.types import ASGIApp

from .injector import Delay, FaultInjector, Fail
from .policy import FaultPolicyStore

logger = logging.getLogger(__name__)

INJECTED_HEADER = "X-Chaos-Injected"
DELAY_HEADER = "X-Chaos-Delay-Ms"


def route_label(request: Request) -> str:
    """Label a request as ``METHOD /route/{template}``, or its raw path if unrouted."""
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return f"{request.method} {getattr(route, 'path', request.url.path)}"
    return f"{request.method} {request.url.path}"


class FaultInjectionMiddleware(BaseHTTPMiddleware):
    """Applies the active fault policy to each request before it is routed.

    ``Fail`` short-circuits with a 500 and the handler never runs. ``Delay``
    suspends only the current request's task, then hands off to the handler.
    Paths listed in ``exempt_paths`` bypass injection entirely.
    """

    def __init__(
        self,
        app: ASGIApp,
        policy_store: FaultPolicyStore,
        injector: FaultInjector | None = None,
        exempt_paths: Iterable[str] = (),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        super().__init__(app)
        self.policy_store = policy_store
        self.injector = injector or FaultInjector()
        self.exempt_paths = frozenset(exempt_paths)
        self.sleep = sleep

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        policy = self.policy_store.current()
        label = route_label(request)
        outcome = self.injector.apply(policy, label)

        if isinstance(outcome, Fail):
            logger.warning("Injected error for %s (error_rate=%.3f)", label, policy.error_rate)
            return JSONResponse(
                status_code=500,
                content={"detail": outcome.message},
                headers={INJECTED_HEADER: "error"},
            )

        if isinstance(outcome, Delay):
            logger.debug("Injecting %dms delay for %s", outcome.delay_ms, label)
            await self.sleep(outcome.delay_ms / 1000)
            response = await call_next(request)
            response.headers[DELAY_HEADER] = str(outcome.delay_ms)
            return response

        return await call_next(request)
