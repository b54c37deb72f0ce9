"""
Notifications module interface.

Other modules depend on INotifier, never on the SES transport.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class INotifier(Protocol):
    """
    Best-effort outbound notifications.

    Every method returns immediately. Delivery happens in a detached task
    that owns its own failure handling; callers never see its outcome.
    """

    @property
    def configured(self) -> bool:
        """Whether a mail transport is available."""
        ...

    def send_welcome(self, user: AuthenticatedUser) -> None:
        """Queue the welcome mail for a newly registered identity."""
        ...

    def send_quiz_created(
        self,
        user: AuthenticatedUser,
        title: str,
        description: str,
        question_count: int,
        is_public: bool,
    ) -> None:
        """Queue the quiz-created mail for the quiz owner."""
        ...
