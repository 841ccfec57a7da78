"""
Tracing package public API.

Re-export the tracers so callers can write:
    from mergetrace.trace import ConsoleTracer, make_tracer
"""

from .tracers import (
    NULL_TRACER,
    SUPPORTED_TRACERS,
    ConsoleTracer,
    CountingTracer,
    LoggingTracer,
    NullTracer,
    RecordingTracer,
    Tracer,
    make_tracer,
)

__all__ = [
    "Tracer",
    "NullTracer",
    "NULL_TRACER",
    "ConsoleTracer",
    "LoggingTracer",
    "RecordingTracer",
    "CountingTracer",
    "SUPPORTED_TRACERS",
    "make_tracer",
]
