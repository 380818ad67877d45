"""Shared telemetry: logging setup and the per-request log context."""

from app.shared.telemetry.logging import RequestIdFilter, request_id_var, setup_logging

__all__ = [
    "setup_logging",
    "request_id_var",
    "RequestIdFilter",
]
