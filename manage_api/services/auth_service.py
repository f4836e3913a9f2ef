"""
Authentication service issuing JWT tokens for login/password credentials.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from manage_api.core.security import create_access_token, verify_password
from manage_api.exceptions import InvalidCredentialsError, UserNotActivatedError
from manage_api.repositories.user_repository import UserRepository
from manage_api.schemas.auth import JWTToken

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service class for authentication.

    Credentials are checked against the stored Argon2id hash; only activated
    users receive a token.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def authenticate(
        self,
        username: str,
        password: str,
        remember_me: bool = False,
    ) -> JWTToken:
        """
        Authenticate a user and issue a bearer token.

        Args:
            username: Login, matched case-insensitively
            password: Plain text password
            remember_me: Issue a long-lived token

        Returns:
            JWTToken holding the signed token

        Raises:
            InvalidCredentialsError: If the login is unknown or the password is wrong
            UserNotActivatedError: If the account was never activated
        """
        login = username.lower()
        user = await self.user_repo.get_by_login(login)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Authentication failed for login {login}")
            raise InvalidCredentialsError()

        if not user.activated:
            logger.warning(f"Authentication refused: user {login} was not activated")
            raise UserNotActivatedError(f"User {login} was not activated")

        token = create_access_token(
            login=user.login,
            authorities=user.authority_names,
            remember_me=remember_me,
        )

        logger.info(f"User authenticated: {user.login}")
        return JWTToken(id_token=token)
