"""
StackIt Backend - Question Model
=================================

What:  The `questions` table. Created by a user, read by anyone; not
       updated or deleted by any current operation.

Query Patterns:
    - List view: all questions newest first, with author and answer ids
      → idx_questions_created_at
    - Detail view: one question by primary key with answers, votes and
      comments eagerly loaded (selectinload)
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import JSON, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.models.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from stackit.models.answer import Answer
    from stackit.models.user import User


class Question(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "questions"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # JSON list of tag strings; JSON keeps the column portable across
    # PostgreSQL and SQLite
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship(back_populates="questions")
    answers: Mapped[List["Answer"]] = relationship(
        back_populates="question",
        order_by="Answer.created_at",
    )

    __table_args__ = (
        Index("idx_questions_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, title='{self.title}')>"
