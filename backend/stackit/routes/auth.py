"""
StackIt Backend - Auth Route Handlers
======================================

What:  POST /api/auth/signup and POST /api/auth/login.
Who:   Called by the client's login/signup form.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.database import get_db_session
from stackit.schemas.auth import AuthResponse, LoginRequest, SignupRequest
from stackit.schemas.common import ErrorResponse
from stackit.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invalid signup details", "model": ErrorResponse},
        409: {"description": "Account already exists", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await user_service.signup(db, payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Invalid login details", "model": ErrorResponse},
        401: {"description": "Invalid Credentials", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await user_service.login(db, payload)
