"""Per-request fault decisions.

The injector never sleeps or raises. It returns an outcome value and leaves
acting on it to the request pipeline.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass

from .policy import FaultPolicy

INJECTED_ERROR_PREFIX = "chaos: injected error for "


@dataclass(frozen=True)
class Proceed:
    """Run the handler right away."""


@dataclass(frozen=True)
class Delay:
    """Suspend the request for ``delay_ms`` milliseconds, then run the handler."""

    delay_ms: int


@dataclass(frozen=True)
class Fail:
    """Abort the request with an injected server error."""

    route: str

    @property
    def message(self) -> str:
        return INJECTED_ERROR_PREFIX + self.route


Outcome = Proceed | Delay | Fail


class FaultInjector:
    """Decides, per request, whether to fail it, delay it or let it through."""

    def __init__(self, rng_factory: Callable[[], random.Random] = random.SystemRandom):
        # Called once per decision. The default draws from the OS and holds no
        # state shared between requests.
        self.rng_factory = rng_factory

    def apply(self, policy: FaultPolicy, route: str) -> Outcome:
        rng = self.rng_factory()

        # Errors are checked first; a failed request never waits.
        if policy.error_rate > 0 and rng.random() < policy.error_rate:
            return Fail(route)

        if policy.injects_latency:
            extra = rng.randint(0, policy.jitter_ms) if policy.jitter_ms > 0 else 0
            return Delay(policy.base_delay_ms + extra)

        return Proceed()
