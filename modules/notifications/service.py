"""
Notification service backed by AWS SES.

The SES client is process-scoped: start() opens it once when the
application boots (only if the transport is configured) and aclose()
drops it on shutdown after pending sends finish. Sends are detached
asyncio tasks; a failed send is logged and goes nowhere else.
"""

import asyncio
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .interfaces import INotifier
from .templates import EmailMessage, quiz_created_email, welcome_email

logger = logging.getLogger(__name__)

CHARSET = "UTF-8"


class Notifier(INotifier):
    """
    Fire-and-forget mailer.

    When the transport is not configured every send is a successful no-op.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Any = None):
        self._settings = settings or get_settings()
        self._client = client
        self._tasks: set[asyncio.Task] = set()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """Open the SES client if configured. Returns the configured state."""
        if self._client is None and self._settings.mail_configured:
            kwargs: dict[str, Any] = {"region_name": self._settings.aws_region}
            if self._settings.aws_access_key_id and self._settings.aws_secret_access_key:
                kwargs["aws_access_key_id"] = self._settings.aws_access_key_id
                kwargs["aws_secret_access_key"] = self._settings.aws_secret_access_key
            if self._settings.ses_endpoint_url:
                kwargs["endpoint_url"] = self._settings.ses_endpoint_url
            self._client = boto3.client("ses", **kwargs)

        if self.configured:
            logger.info("Email service initialized")
        else:
            logger.info("Email service not configured")
        return self.configured

    async def aclose(self) -> None:
        """Wait for in-flight sends, then drop the transport."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._client = None

    @property
    def configured(self) -> bool:
        return self._client is not None

    @property
    def pending(self) -> int:
        return len(self._tasks)

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def send_welcome(self, user: AuthenticatedUser) -> None:
        self.dispatch(welcome_email(user.username, user.email))

    def send_quiz_created(
        self,
        user: AuthenticatedUser,
        title: str,
        description: str,
        question_count: int,
        is_public: bool,
    ) -> None:
        self.dispatch(quiz_created_email(
            user.username,
            user.email,
            title,
            description,
            question_count,
            is_public,
        ))

    def dispatch(self, message: EmailMessage) -> Optional[asyncio.Task]:
        """
        Start delivering a message without waiting for it.

        Returns:
            The detached task, or None when no transport is configured.
        """
        if not self.configured:
            logger.info("Email not sent (service not configured): %s", message.subject)
            return None

        task = asyncio.create_task(self._deliver(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _deliver(self, message: EmailMessage) -> bool:
        try:
            message_id = await asyncio.to_thread(self._send, message)
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to send email to %s: %s", message.to, e)
            return False
        except Exception:
            logger.exception("Unexpected error sending email to %s", message.to)
            return False
        logger.info("Email sent: %s", message_id)
        return True

    def _send(self, message: EmailMessage) -> str:
        body: dict[str, Any] = {"Text": {"Charset": CHARSET, "Data": message.text}}
        if message.html:
            body["Html"] = {"Charset": CHARSET, "Data": message.html}

        response = self._client.send_email(
            Source=f'"{self._settings.mail_from_name}" <{self._settings.mail_from}>',
            Destination={"ToAddresses": [message.to]},
            Message={
                "Subject": {"Charset": CHARSET, "Data": message.subject},
                "Body": body,
            },
        )
        return response["MessageId"]


# Process-scoped instance, managed by the application lifespan
_notifier: Optional[Notifier] = None


def init_notifier(settings: Optional[Settings] = None) -> Notifier:
    """Create and start the process-wide notifier (idempotent)."""
    global _notifier
    if _notifier is None:
        _notifier = Notifier(settings)
        _notifier.start()
    return _notifier


def get_notifier() -> Notifier:
    """
    Get the process-wide notifier.

    Falls back to an unstarted (unconfigured) notifier when the lifespan
    has not run, so sends become no-ops instead of errors.
    """
    global _notifier
    if _notifier is None:
        _notifier = Notifier()
    return _notifier


async def shutdown_notifier() -> None:
    global _notifier
    if _notifier is not None:
        await _notifier.aclose()
    _notifier = None


def reset_notifier() -> None:
    """Reset the notifier singleton (for testing)."""
    global _notifier
    _notifier = None
