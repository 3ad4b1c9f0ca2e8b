"""Schemas for GET /api/notifications and PATCH /api/notifications/{id}/read."""

import uuid

from stackit.models.enums import NotificationType
from stackit.schemas.common import CamelModel, UTCDatetime


class NotificationResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: NotificationType
    content: str
    related_id: uuid.UUID
    read: bool
    created_at: UTCDatetime
