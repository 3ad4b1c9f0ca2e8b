"""
StackIt Backend - Notification Route Handlers
==============================================

What:  GET /api/notifications and PATCH /api/notifications/{id}/read.
Who:   Polled by the client's notification bell; there is no push channel.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.schemas.common import ErrorResponse
from stackit.schemas.notification import NotificationResponse
from stackit.security import get_current_user_id
from stackit.services.notification_service import notification_service

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get(
    "",
    response_model=List[NotificationResponse],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="List my notifications, newest first",
)
async def list_notifications(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[NotificationResponse]:
    return await notification_service.list_notifications(db, user_id)


@router.patch(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Notification not found", "model": ErrorResponse},
    },
    summary="Mark one of my notifications as read",
)
async def mark_notification_read(
    notification_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> NotificationResponse:
    return await notification_service.mark_as_read(db, user_id, notification_id)
