"""
StackIt Backend - Question Route Handlers
==========================================

What:  GET/POST /api/questions and GET /api/questions/{id}.
Who:   Called by the client's home page, ask-question form and question
       detail page.

The id path parameter is a plain string: a malformed id is just another
id that matches nothing and gets a 404.
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.exceptions import NotFoundError
from stackit.schemas.common import ErrorResponse
from stackit.schemas.question import (
    QuestionCreate,
    QuestionCreated,
    QuestionDetail,
    QuestionListItem,
)
from stackit.security import get_current_user_id
from stackit.services.question_service import question_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/questions", tags=["Questions"])


@router.get(
    "",
    response_model=List[QuestionListItem],
    summary="List all questions",
)
async def list_questions(
    db: AsyncSession = Depends(get_db_session),
) -> List[QuestionListItem]:
    return await question_service.get_questions(db)


@router.post(
    "",
    response_model=QuestionCreated,
    responses={
        400: {"description": "Invalid question", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Ask a question",
)
async def create_question(
    payload: QuestionCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionCreated:
    return await question_service.create_question(db, user_id, payload)


@router.get(
    "/{question_id}",
    response_model=QuestionDetail,
    responses={
        404: {"description": "Question not found", "model": ErrorResponse},
    },
    summary="Get a question with its answers, votes and comments",
)
async def get_question(
    question_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionDetail:
    question = await question_service.get_question(db, question_id)
    if question is None:
        raise NotFoundError(resource="question", resource_id=question_id)
    return question
