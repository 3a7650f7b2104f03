"""Telemetry helpers and metrics."""

from .metrics import (
    CAPABILITY_CALLS,
    ERROR_COUNTER,
    INTENT_COUNTER,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    observe_capability_call,
    observe_intent,
    observe_request,
)

__all__ = [
    "CAPABILITY_CALLS",
    "ERROR_COUNTER",
    "INTENT_COUNTER",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "observe_capability_call",
    "observe_intent",
    "observe_request",
]
