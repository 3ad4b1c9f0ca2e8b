"""
StackIt Backend - Notification Model
=====================================

What:  The `notifications` table: the per-user inbox.

Lifecycle:
    1. Inserted as a side effect of answer/comment creation (read = false)
    2. `read` flipped to true by PATCH /api/notifications/{id}/read
    3. Never deleted

`related_id` points at the answer or comment that caused the notification.
It has no foreign key because it may reference either table.

Index on (user_id, created_at DESC) serves the inbox query
("my notifications, newest first").
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Text, Uuid, false, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackit.database import Base
from stackit.models.enums import NotificationType
from stackit.models.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from stackit.models.user import User


class Notification(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "notifications"

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[NotificationType] = mapped_column(
        Enum(NotificationType, native_enum=False, length=16, name="notification_type"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    related_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    user: Mapped["User"] = relationship(back_populates="notifications")

    __table_args__ = (
        Index("idx_notifications_user_created", "user_id", text("created_at DESC")),
    )

    def __repr__(self) -> str:
        return (
            f"<Notification(id={self.id}, user_id={self.user_id}, "
            f"type={self.type}, read={self.read})>"
        )
