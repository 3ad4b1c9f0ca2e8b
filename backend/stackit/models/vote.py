"""
StackIt Backend - Vote Model
=============================

What:  The `votes` table: one UPVOTE or DOWNVOTE per user per answer.

Invariant:
    At most one row per (user_id, answer_id), enforced by
    uq_votes_user_answer. AnswerService treats a violation of this
    constraint on insert as "someone else got there first" and switches to
    updating the existing row.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.models.enums import VoteType
from stackit.models.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from stackit.models.answer import Answer
    from stackit.models.user import User


class Vote(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "votes"

    type: Mapped[VoteType] = mapped_column(
        Enum(VoteType, native_enum=False, length=16, name="vote_type"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    answer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("answers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    answer: Mapped["Answer"] = relationship(back_populates="votes")
    user: Mapped["User"] = relationship()

    __table_args__ = (
        UniqueConstraint("user_id", "answer_id", name="uq_votes_user_answer"),
    )

    def __repr__(self) -> str:
        return f"<Vote(user={self.user_id}, answer={self.answer_id}, type={self.type})>"
