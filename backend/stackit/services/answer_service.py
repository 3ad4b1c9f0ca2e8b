"""
StackIt Backend - Answer Service
=================================

What:  Creates answers and comments, applies votes, and triggers the
       notifications and mention scans those writes cause.
Who:   Called by the /api/answers route handlers and the seed script.

Orchestration (create_answer / comment_on_answer):
    ┌──────────────┐    ┌──────────┐    ┌──────────────────┐    ┌──────────────┐
    │ Load parent  │───▶│  Insert  │───▶│ Notify owner     │───▶│ Mention scan │
    │ (404 if none)│    │  row     │    │ (ANSWER/COMMENT) │    │ (MENTION)    │
    └──────────────┘    └──────────┘    └──────────────────┘    └──────────────┘

    Every step flushes through the caller's session; the request's unit
    of work commits all of it or none of it.

Vote toggle (vote_answer):
    no vote yet        → insert
    same type again    → delete (un-vote)
    opposite type      → update type in place
    insert hits uq_votes_user_answer (concurrent vote) → update instead
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.exceptions import AuthenticationError, NotFoundError, ValidationError
from stackit.ids import parse_id
from stackit.models.answer import Answer
from stackit.models.comment import Comment
from stackit.models.enums import NotificationType, VoteType
from stackit.models.question import Question
from stackit.models.user import User
from stackit.models.vote import Vote
from stackit.schemas.answer import (
    AnswerCreate,
    AnswerResponse,
    CommentResponse,
    VoteTally,
)
from stackit.services.mention_service import notify_mentions
from stackit.services.notification_service import notify
from stackit.services.vote_tally import tally_votes

logger = logging.getLogger(__name__)


class AnswerService:
    """
    Business logic for answers, votes and comments.

    Stateless: the session is passed into every call.
    """

    async def _get_author(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        # A valid token for a user that no longer exists
        author = await db.get(User, user_id)
        if author is None:
            raise AuthenticationError(message="Unauthorized")
        return author

    async def _get_answer(self, db: AsyncSession, answer_id) -> Answer:
        parsed_id = parse_id(answer_id)
        answer = await db.get(Answer, parsed_id) if parsed_id is not None else None
        if answer is None:
            raise NotFoundError(resource="answer", resource_id=str(answer_id))
        return answer

    async def _find_vote(
        self, db: AsyncSession, user_id: uuid.UUID, answer_id: uuid.UUID
    ) -> Optional[Vote]:
        result = await db.execute(
            select(Vote).where(Vote.user_id == user_id, Vote.answer_id == answer_id)
        )
        return result.scalar_one_or_none()

    async def create_answer(
        self, db: AsyncSession, user_id: uuid.UUID, payload: AnswerCreate
    ) -> AnswerResponse:
        """
        Post an answer to a question.

        Side effects:
            - ANSWER notification to the question owner, even when the owner
              answers their own question
            - MENTION notifications for every resolvable @username except the
              author

        Raises:
            NotFoundError: question_id does not reference a question
        """
        question_id = parse_id(payload.question_id)
        question = await db.get(Question, question_id) if question_id is not None else None
        if question is None:
            raise NotFoundError(resource="question", resource_id=payload.question_id)

        author = await self._get_author(db, user_id)

        answer = Answer(
            content=payload.content,
            question_id=question.id,
            user_id=author.id,
            user=author,
        )
        db.add(answer)
        await db.flush()
        logger.info("Answer %s created on question %s by %s", answer.id, question.id, author.id)

        await notify(
            db,
            user_id=question.user_id,
            type=NotificationType.ANSWER,
            content=f"New answer to your question: {question.title}",
            related_id=answer.id,
        )
        await notify_mentions(
            db,
            content=payload.content,
            author=author,
            related_id=answer.id,
            source="an answer",
        )

        return AnswerResponse.model_validate(answer)

    async def vote_answer(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        answer_id: str,
        vote_type: VoteType,
    ) -> VoteTally:
        """
        Apply a vote with toggle/switch semantics and return the new counts.

        Voting never emits a notification.

        Raises:
            NotFoundError: answer does not exist
        """
        answer = await self._get_answer(db, answer_id)
        await self._get_author(db, user_id)
        existing = await self._find_vote(db, user_id, answer.id)

        if existing is None:
            try:
                async with db.begin_nested():
                    db.add(Vote(type=vote_type, user_id=user_id, answer_id=answer.id))
            except IntegrityError:
                # A concurrent request inserted this user's vote between our
                # read and our insert; take the update path on that row.
                existing = await self._find_vote(db, user_id, answer.id)
                if existing is None:
                    raise
                logger.info(
                    "Vote insert raced for user %s on answer %s; updating instead",
                    user_id,
                    answer.id,
                )
                existing.type = vote_type
                await db.flush()
        elif existing.type == vote_type:
            await db.delete(existing)
            await db.flush()
        else:
            existing.type = vote_type
            await db.flush()

        return await tally_votes(db, answer.id)

    async def comment_on_answer(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        answer_id: str,
        content: str,
    ) -> CommentResponse:
        """
        Attach a comment to an answer.

        Side effects:
            - COMMENT notification to the answer's author (no self-suppression)
            - MENTION notifications, excluding the commenter

        Raises:
            ValidationError: content is blank
            NotFoundError: answer does not exist
        """
        if not content.strip():
            raise ValidationError(message="Comment cannot be empty", field="content")

        answer = await self._get_answer(db, answer_id)
        author = await self._get_author(db, user_id)

        comment = Comment(
            content=content,
            answer_id=answer.id,
            user_id=author.id,
            user=author,
        )
        db.add(comment)
        await db.flush()
        logger.info("Comment %s created on answer %s by %s", comment.id, answer.id, author.id)

        await notify(
            db,
            user_id=answer.user_id,
            type=NotificationType.COMMENT,
            content=f"New comment on your answer by {author.username}",
            related_id=comment.id,
        )
        await notify_mentions(
            db,
            content=content,
            author=author,
            related_id=comment.id,
            source="a comment",
        )

        return CommentResponse.model_validate(comment)


answer_service = AnswerService()
