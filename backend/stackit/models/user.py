"""
StackIt Backend - User Model
=============================

What:  The `users` table: identity and credentials.
Lifecycle:
    Created at signup; never deleted in-flow. `username` is unique because
    mentions resolve users by exact username; `email` is unique because it
    is the login identifier.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.models.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from stackit.models.answer import Answer
    from stackit.models.comment import Comment
    from stackit.models.notification import Notification
    from stackit.models.question import Question


class User(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # bcrypt hash, never the plain password
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    questions: Mapped[List["Question"]] = relationship(back_populates="user")
    answers: Mapped[List["Answer"]] = relationship(back_populates="user")
    comments: Mapped[List["Comment"]] = relationship(back_populates="user")
    notifications: Mapped[List["Notification"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
