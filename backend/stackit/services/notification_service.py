"""
StackIt Backend - Notification Service
=======================================

What:  The notification emitter plus the inbox read/mark-as-read operations.
How:   `notify()` is an unconditional insert (read = false), called by
       AnswerService and the mention scan as a side effect of answer and
       comment creation. It only flushes; the request's unit of work
       commits it together with the write that triggered it.
Who:   AnswerService, mention_service, and the /api/notifications routes.

Notification messages:
    ANSWER   "New answer to your question: {question title}"
    COMMENT  "New comment on your answer by {commenter}"
    MENTION  "You were mentioned in an answer|a comment by {author}"
"""

import logging
import uuid
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.exceptions import NotFoundError
from stackit.ids import parse_id
from stackit.models.enums import NotificationType
from stackit.models.notification import Notification
from stackit.schemas.notification import NotificationResponse

logger = logging.getLogger(__name__)


async def notify(
    db: AsyncSession,
    user_id: uuid.UUID,
    type: NotificationType,
    content: str,
    related_id: uuid.UUID,
) -> Notification:
    """
    Insert one unread notification for `user_id`.

    No deduplication and no batching: every call inserts a row. Storage
    errors propagate to the caller.
    """
    notification = Notification(
        user_id=user_id,
        type=type,
        content=content,
        related_id=related_id,
        read=False,
    )
    db.add(notification)
    await db.flush()
    logger.info(
        "Notification %s (%s) queued for user %s", notification.id, type.value, user_id
    )
    return notification


class NotificationService:
    """Inbox operations for the authenticated user."""

    async def list_notifications(
        self, db: AsyncSession, user_id: uuid.UUID
    ) -> List[NotificationResponse]:
        """All notifications addressed to `user_id`, newest first."""
        result = await db.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(desc(Notification.created_at), desc(Notification.id))
        )
        return [
            NotificationResponse.model_validate(notification)
            for notification in result.scalars().all()
        ]

    async def mark_as_read(
        self, db: AsyncSession, user_id: uuid.UUID, notification_id: str
    ) -> NotificationResponse:
        """
        Flag one notification as read.

        Only the recipient may mark it; someone else's notification is
        reported as not found rather than forbidden so ids do not leak.

        Raises:
            NotFoundError: unknown id, malformed id, or not the recipient.
        """
        parsed_id = parse_id(notification_id)
        notification = None
        if parsed_id is not None:
            result = await db.execute(
                select(Notification).where(
                    Notification.id == parsed_id,
                    Notification.user_id == user_id,
                )
            )
            notification = result.scalar_one_or_none()

        if notification is None:
            raise NotFoundError(resource="notification", resource_id=str(notification_id))

        notification.read = True
        await db.flush()
        return NotificationResponse.model_validate(notification)


notification_service = NotificationService()
