"""
StackIt Backend - Question Service
===================================

What:  Creates questions and serves the two read shapes.
Who:   Called by the /api/questions route handlers and the seed script.

Read shapes:
    get_questions() → every question, newest first, with author username
                      and answer ids (list view)
    get_question()  → one question with author username and its answers,
                      each with author, votes, and comments with authors
                      (detail view); None when the id resolves to nothing

Query plan (detail view):
    1 query for the question + selectinload batches for user, answers,
    answer users, votes, comments and comment users. No lazy loads happen
    after the service returns.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stackit.exceptions import AuthenticationError, DatabaseError
from stackit.ids import parse_id
from stackit.models.answer import Answer
from stackit.models.comment import Comment
from stackit.models.question import Question
from stackit.models.user import User
from stackit.schemas.question import (
    QuestionCreate,
    QuestionCreated,
    QuestionDetail,
    QuestionListItem,
)

logger = logging.getLogger(__name__)


class QuestionService:

    async def create_question(
        self, db: AsyncSession, user_id: uuid.UUID, payload: QuestionCreate
    ) -> QuestionCreated:
        if await db.get(User, user_id) is None:
            # Token outlived its user
            raise AuthenticationError(message="Unauthorized")

        question = Question(
            title=payload.title,
            description=payload.description,
            tags=list(payload.tags or []),
            user_id=user_id,
        )
        db.add(question)
        await db.flush()
        logger.info("Question %s created by %s", question.id, user_id)
        return QuestionCreated(id=question.id, title=question.title)

    async def get_questions(self, db: AsyncSession) -> List[QuestionListItem]:
        try:
            result = await db.execute(
                select(Question)
                .options(
                    selectinload(Question.user),
                    selectinload(Question.answers),
                )
                .order_by(desc(Question.created_at))
            )
            return [
                QuestionListItem.model_validate(question)
                for question in result.scalars().all()
            ]
        except Exception as e:
            logger.error("Database error listing questions: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve questions. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_question(
        self, db: AsyncSession, question_id: str
    ) -> Optional[QuestionDetail]:
        """
        Retrieve one question in detail shape.

        Returns None (never raises NotFoundError) for unknown or malformed
        ids; the route turns None into a 404.
        """
        parsed_id = parse_id(question_id)
        if parsed_id is None:
            return None

        result = await db.execute(
            select(Question)
            .where(Question.id == parsed_id)
            .options(
                selectinload(Question.user),
                selectinload(Question.answers).options(
                    selectinload(Answer.user),
                    selectinload(Answer.votes),
                    selectinload(Answer.comments).selectinload(Comment.user),
                ),
            )
        )
        question = result.scalar_one_or_none()
        if question is None:
            return None
        return QuestionDetail.model_validate(question)


question_service = QuestionService()
