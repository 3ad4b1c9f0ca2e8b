"""
StackIt Backend - ORM Models
=============================

Importing this package registers every mapper on Base.metadata, which
Alembic autogeneration and `create_tables()` both rely on.

Tables:
    users ─┬─< questions ─< answers ─┬─< votes     (unique per user/answer)
           │                         └─< comments
           └─< notifications
"""

from stackit.models.enums import NotificationType, VoteType
from stackit.models.user import User
from stackit.models.question import Question
from stackit.models.answer import Answer
from stackit.models.vote import Vote
from stackit.models.comment import Comment
from stackit.models.notification import Notification

__all__ = [
    "Answer",
    "Comment",
    "Notification",
    "NotificationType",
    "Question",
    "User",
    "Vote",
    "VoteType",
]
