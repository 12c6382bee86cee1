"""Fault injection: policy snapshots, per-request decisions and the request pipeline."""

from .injector import Delay, Fail, FaultInjector, Outcome, Proceed
from .pipeline import FaultInjectionMiddleware, route_label
from .policy import FaultPolicy, FaultPolicyStore

__all__ = [
    "Delay",
    "Fail",
    "FaultInjectionMiddleware",
    "FaultInjector",
    "FaultPolicy",
    "FaultPolicyStore",
    "Outcome",
    "Proceed",
    "route_label",
]
