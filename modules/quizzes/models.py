"""
Quiz data models.

Questions are embedded in their quiz and never addressed on their own.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from shared.models import ApiModel, OwnerSummary


class Question(ApiModel):
    """A stored question."""

    id: str
    text: str
    options: list[str]
    correct_index: int


class Quiz(ApiModel):
    """
    Full quiz document.

    ``owner`` is the owning identity's id and never changes after creation.
    ``owner_profile`` is filled in on read and update paths that resolve
    the owner.
    """

    id: str
    title: str
    description: str = ""
    owner: str
    is_public: bool = False
    questions: list[Question] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    owner_profile: Optional[OwnerSummary] = None

    @property
    def question_count(self) -> int:
        return len(self.questions)


class PublicQuizItem(ApiModel):
    """Public listing entry: summary plus question count, no questions."""

    id: str
    title: str
    description: str = ""
    owner: str
    owner_profile: Optional[OwnerSummary] = None
    created_at: datetime
    question_count: int


class PlayQuestion(ApiModel):
    """A question as served to the player (includes the correct index)."""

    id: str
    text: str
    options: list[str]
    correct_index: int


class PlayableQuiz(ApiModel):
    """Projection of a quiz with just what the play view needs."""

    id: str
    title: str
    description: str = ""
    owner_profile: Optional[OwnerSummary] = None
    questions: list[PlayQuestion]
    question_count: int
