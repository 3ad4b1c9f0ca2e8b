"""
StackIt Backend - Answer Route Handlers
========================================

What:  POST /api/answers, POST /api/answers/{id}/vote,
       POST /api/answers/{id}/comment.
Who:   Called by the client's question detail page (answer box, vote
       buttons, comment box).

All three require a bearer token.
"""

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.schemas.answer import (
    AnswerCreate,
    AnswerResponse,
    CommentCreate,
    CommentResponse,
    VoteRequest,
    VoteTally,
)
from stackit.schemas.common import ErrorResponse
from stackit.security import get_current_user_id
from stackit.services.answer_service import answer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/answers", tags=["Answers"])

_COMMON_ERRORS = {
    400: {"description": "Invalid request body", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
}


@router.post(
    "",
    response_model=AnswerResponse,
    responses={
        **_COMMON_ERRORS,
        404: {"description": "Question not found", "model": ErrorResponse},
    },
    summary="Answer a question",
)
async def create_answer(
    payload: AnswerCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> AnswerResponse:
    return await answer_service.create_answer(db, user_id, payload)


@router.post(
    "/{answer_id}/vote",
    response_model=VoteTally,
    responses={
        **_COMMON_ERRORS,
        404: {"description": "Answer not found", "model": ErrorResponse},
    },
    summary="Upvote or downvote an answer (repeat to undo)",
)
async def vote_answer(
    answer_id: str,
    payload: VoteRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> VoteTally:
    return await answer_service.vote_answer(db, user_id, answer_id, payload.vote_type)


@router.post(
    "/{answer_id}/comment",
    response_model=CommentResponse,
    responses={
        **_COMMON_ERRORS,
        404: {"description": "Answer not found", "model": ErrorResponse},
    },
    summary="Comment on an answer",
)
async def comment_on_answer(
    answer_id: str,
    payload: CommentCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    return await answer_service.comment_on_answer(db, user_id, answer_id, payload.content)
