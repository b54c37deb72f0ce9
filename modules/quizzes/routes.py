"""
Quiz API endpoints.

Mounted under ``/resource``. Every handler answers with the standard
envelope; failures propagate as QuizAppError and are rendered by the
application's exception handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_quiz_service
from api.middleware.auth import get_current_user, get_optional_user
from api.models.envelope import respond
from api.validation import validated_body, validated_quiz_id
from shared.models import AuthenticatedUser
from modules.validation import QUIZ_CREATE, QUIZ_UPDATE
from modules.validation.schemas import QuizCreateRequest, QuizUpdateRequest

from .interfaces import IQuizService

router = APIRouter()


@router.post("", status_code=201, response_model=None)
async def create_quiz(
    user: AuthenticatedUser = Depends(get_current_user),
    request: QuizCreateRequest = Depends(validated_body(QUIZ_CREATE)),
    service: IQuizService = Depends(get_quiz_service),
) -> JSONResponse:
    """
    Create a quiz owned by the caller.

    A "quiz created" mail is queued for the owner; delivery never
    affects this response.
    """
    quiz = await service.create_quiz(user, request)
    return respond({"resource": quiz}, message="Quiz created successfully", status_code=201)


@router.get("", response_model=None)
async def list_quizzes(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IQuizService = Depends(get_quiz_service),
) -> JSONResponse:
    """
    List the caller's quizzes, newest first.

    Admins see every quiz.
    """
    quizzes = await service.list_quizzes(user)
    return respond({"resources": quizzes, "count": len(quizzes)})


# Declared before /{quiz_id} so "public" is not taken for an id.
@router.get("/public", response_model=None)
async def list_public_quizzes(
    service: IQuizService = Depends(get_quiz_service),
) -> JSONResponse:
    """List public quizzes with question counts. No authentication."""
    quizzes = await service.list_public()
    return respond({"resources": quizzes, "count": len(quizzes)})


@router.get("/{quiz_id}", response_model=None)
async def get_quiz(
    user: AuthenticatedUser = Depends(get_current_user),
    quiz_id: str = Depends(validated_quiz_id),
    service: IQuizService = Depends(get_quiz_service),
) -> JSONResponse:
    quiz = await service.get_quiz(quiz_id, user)
    return respond({"resource": quiz})


@router.put("/{quiz_id}", response_model=None)
async def update_quiz(
    user: AuthenticatedUser = Depends(get_current_user),
    quiz_id: str = Depends(validated_quiz_id),
    request: QuizUpdateRequest = Depends(validated_body(QUIZ_UPDATE)),
    service: IQuizService = Depends(get_quiz_service),
) -> JSONResponse:
    """
    Update any subset of a quiz's fields.

    Only the owner or an admin may update.
    """
    quiz = await service.update_quiz(quiz_id, user, request)
    return respond({"resource": quiz}, message="Quiz updated successfully")


@router.delete("/{quiz_id}", response_model=None)
async def delete_quiz(
    user: AuthenticatedUser = Depends(get_current_user),
    quiz_id: str = Depends(validated_quiz_id),
    service: IQuizService = Depends(get_quiz_service),
) -> JSONResponse:
    """Delete a quiz permanently. Only the owner or an admin may delete."""
    await service.delete_quiz(quiz_id, user)
    return respond(message="Quiz deleted successfully")


@router.get("/{quiz_id}/play", response_model=None)
async def play_quiz(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    quiz_id: str = Depends(validated_quiz_id),
    service: IQuizService = Depends(get_quiz_service),
) -> JSONResponse:
    """
    Get a quiz for playing.

    Public quizzes are open to anyone; private ones only to the owner or
    an admin.
    """
    quiz = await service.get_playable(quiz_id, user)
    return respond({"resource": quiz})
