"""
StackIt Backend - User Service
===============================

What:  Signup and login.
How:   Passwords are bcrypt-hashed (stackit.security); successful calls
       return the public user plus a signed bearer token.

Token lifetimes (settings):
    signup → signup_token_ttl_seconds (1 day)
    login  → login_token_ttl_seconds  (1 hour)

Login never reveals which half of the credentials was wrong: unknown email
and wrong password raise the same AuthenticationError("Invalid Credentials").
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.config import settings
from stackit.exceptions import AuthenticationError, ConflictError
from stackit.models.user import User
from stackit.schemas.auth import AuthResponse, LoginRequest, SignupRequest
from stackit.schemas.common import UserPublic
from stackit.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid Credentials"
WELCOME_MESSAGE = "Welcome to StackIt"


class UserService:

    async def signup(self, db: AsyncSession, payload: SignupRequest) -> AuthResponse:
        """
        Register a new user.

        Raises:
            ConflictError: email or username already registered
        """
        result = await db.execute(
            select(User.id).where(
                or_(User.email == payload.email, User.username == payload.username)
            )
        )
        if result.first() is not None:
            raise ConflictError(context={"email": payload.email})

        user = User(
            username=payload.username,
            email=payload.email,
            password=await hash_password(payload.password),
        )
        try:
            async with db.begin_nested():
                db.add(user)
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email/username
            raise ConflictError(context={"email": payload.email})

        logger.info("User %s signed up", user.id)
        token = create_access_token(user.id, settings.signup_token_ttl_seconds)
        return AuthResponse(
            user=UserPublic.model_validate(user),
            token=token,
            message=WELCOME_MESSAGE,
        )

    async def login(self, db: AsyncSession, payload: LoginRequest) -> AuthResponse:
        """
        Exchange email + password for a fresh token.

        Raises:
            AuthenticationError: unknown email or wrong password (same message)
        """
        result = await db.execute(select(User).where(User.email == payload.email))
        user = result.scalar_one_or_none()

        if user is None or not await verify_password(payload.password, user.password):
            logger.info("Failed login attempt")
            raise AuthenticationError(message=INVALID_CREDENTIALS)

        token = create_access_token(user.id, settings.login_token_ttl_seconds)
        return AuthResponse(user=UserPublic.model_validate(user), token=token)


user_service = UserService()
