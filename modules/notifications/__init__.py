"""
Notifications module.

Best-effort email on registration and quiz creation.

Public API:
- INotifier: Interface for notification dispatch
- Notifier: SES-backed implementation
- init_notifier / get_notifier / shutdown_notifier: process lifecycle
"""

from .interfaces import INotifier
from .service import (
    Notifier,
    init_notifier,
    get_notifier,
    shutdown_notifier,
    reset_notifier,
)
from .templates import EmailMessage, welcome_email, quiz_created_email

__all__ = [
    "INotifier",
    "Notifier",
    "init_notifier",
    "get_notifier",
    "shutdown_notifier",
    "reset_notifier",
    "EmailMessage",
    "welcome_email",
    "quiz_created_email",
]
