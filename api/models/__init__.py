"""API models package."""

from .envelope import Envelope, respond, error_body

__all__ = [
    "Envelope",
    "respond",
    "error_body",
]
