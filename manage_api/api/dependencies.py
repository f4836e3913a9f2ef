"""
FastAPI dependencies for authentication and service wiring.

This module provides:
- Current login resolution from the bearer token
- Service and repository instances bound to the request session
"""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from manage_api.core.database import get_db
from manage_api.core.security import decode_token
from manage_api.repositories.user_repository import UserRepository
from manage_api.services import AuthService, MailService, UserService

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI - this adds the padlock icon
security = HTTPBearer(
    scheme_name="Bearer",
    description="Enter your JWT token",
    auto_error=False,
)


async def get_current_login(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    """
    Resolve the login of the current user from the Authorization header.

    A missing, malformed or expired token is treated as an anonymous request:
    the endpoint decides whether that is an error.

    Returns:
        The token subject, or None for anonymous requests

    Usage:
        @router.get("/authenticate")
        async def is_authenticated(login: CurrentLogin) -> str:
            return login or ""
    """
    if not credentials:
        return None

    try:
        token_data = decode_token(credentials.credentials)
    except JWTError:
        logger.warning("Ignoring invalid bearer token")
        return None

    login = token_data.get("sub")
    if not login:
        logger.warning("Ignoring bearer token without subject")
        return None

    return login


# ============================================================================
# Service Dependencies
# ============================================================================


def get_mail_service() -> MailService:
    """Dependency to get the MailService instance."""
    return MailService()


def get_user_service(
    db: AsyncSession = Depends(get_db),
    mail_service: MailService = Depends(get_mail_service),
) -> UserService:
    """
    Dependency to get UserService instance.

    This dependency provides a UserService with an active database session.
    """
    return UserService(db, mail_service)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """Dependency to get a UserRepository bound to the request session."""
    return UserRepository(db)


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(db)


# Convenience type aliases for common dependencies
CurrentLogin = Annotated[str | None, Depends(get_current_login)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
MailServiceDep = Annotated[MailService, Depends(get_mail_service)]
