"""
StackIt Backend - Mention Scan
===============================

What:  Finds "@username" tokens in answer/comment text and notifies the
       users they name.

Rules:
    - Token: "@" followed by one or more ASCII word characters [A-Za-z0-9_]
    - Usernames match exactly (case-sensitive)
    - Duplicates are kept: "@alice @alice" notifies alice twice
    - Unknown usernames are ignored
    - The acting user never gets a MENTION notification for their own text
"""

import logging
import re
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.models.enums import NotificationType
from stackit.models.user import User
from stackit.services.notification_service import notify

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"@(\w+)", re.ASCII)


def extract_mentions(content: str) -> List[str]:
    """
    Candidate usernames in order of appearance, without the leading "@".

    >>> extract_mentions("thanks @alice and @bob, @alice!")
    ['alice', 'bob', 'alice']
    """
    return MENTION_PATTERN.findall(content or "")


async def notify_mentions(
    db: AsyncSession,
    content: str,
    author: User,
    related_id: uuid.UUID,
    source: str,
) -> int:
    """
    Emit a MENTION notification for every resolvable mention in `content`.

    Args:
        content:    Free text of the new answer or comment
        author:     The acting user (excluded from notifications)
        related_id: Id of the new answer or comment
        source:     "an answer" or "a comment", used in the message

    Returns:
        Number of notifications emitted.
    """
    emitted = 0
    for username in extract_mentions(content):
        result = await db.execute(select(User).where(User.username == username))
        mentioned = result.scalar_one_or_none()
        if mentioned is None or mentioned.id == author.id:
            continue
        await notify(
            db,
            user_id=mentioned.id,
            type=NotificationType.MENTION,
            content=f"You were mentioned in {source} by {author.username}",
            related_id=related_id,
        )
        emitted += 1

    if emitted:
        logger.info("Emitted %d mention notification(s) for %s", emitted, related_id)
    return emitted
