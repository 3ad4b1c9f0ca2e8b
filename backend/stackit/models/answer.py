"""
StackIt Backend - Answer Model
===============================

What:  The `answers` table. Each answer belongs to exactly one question and
       carries its votes and comments.
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.models.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from stackit.models.comment import Comment
    from stackit.models.question import Question
    from stackit.models.user import User
    from stackit.models.vote import Vote


class Answer(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "answers"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    question_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    question: Mapped["Question"] = relationship(back_populates="answers")
    user: Mapped["User"] = relationship(back_populates="answers")
    votes: Mapped[List["Vote"]] = relationship(back_populates="answer")
    comments: Mapped[List["Comment"]] = relationship(
        back_populates="answer",
        order_by="Comment.created_at",
    )

    def __repr__(self) -> str:
        return f"<Answer(id={self.id}, question_id={self.question_id})>"
