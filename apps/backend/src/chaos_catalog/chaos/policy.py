"""Fault injection policy snapshots."""

import logging
import threading

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class FaultPolicy(BaseModel):
    """Immutable snapshot of the active fault injection knobs.

    Every knob defaults to zero, which disables injection entirely.
    """

    model_config = ConfigDict(frozen=True)

    base_delay_ms: int = Field(0, ge=0)
    jitter_ms: int = Field(0, ge=0)
    error_rate: float = 0.0

    @classmethod
    def disabled(cls) -> "FaultPolicy":
        return cls()

    @property
    def injects_latency(self) -> bool:
        return self.base_delay_ms > 0 or self.jitter_ms > 0

    @property
    def is_active(self) -> bool:
        return self.error_rate > 0 or self.injects_latency


class FaultPolicyStore:
    """Holds the process-wide policy and swaps it as a single reference.

    Readers take one snapshot per request via ``current()``; since the
    snapshot itself is frozen, a concurrent ``replace()`` can never expose a
    half-updated policy.
    """

    def __init__(self, policy: FaultPolicy | None = None):
        self._policy = policy if policy is not None else FaultPolicy.disabled()
        self._write_lock = threading.Lock()

    def current(self) -> FaultPolicy:
        return self._policy

    def replace(self, policy: FaultPolicy) -> FaultPolicy:
        """Install a new policy and return the one it replaced."""
        with self._write_lock:
            previous, self._policy = self._policy, policy
        logger.info(
            "Fault policy replaced: latency=%dms jitter=%dms error_rate=%.3f",
            policy.base_delay_ms,
            policy.jitter_ms,
            policy.error_rate,
        )
        return previous

    def update(self, **changes: int | float | None) -> FaultPolicy:
        """Replace only the given knobs; ``None`` values keep the current setting."""
        with self._write_lock:
            current = self._policy
            policy = FaultPolicy(
                **{**current.model_dump(), **{k: v for k, v in changes.items() if v is not None}}
            )
            self._policy = policy
        logger.info(
            "Fault policy updated: latency=%dms jitter=%dms error_rate=%.3f",
            policy.base_delay_ms,
            policy.jitter_ms,
            policy.error_rate,
        )
        return policy
