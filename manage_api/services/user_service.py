"""
User account service.

This module provides:
- Registration and activation of accounts
- Current user lookup and profile update
- Password change for the current user
- Password reset by mailed key
"""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from manage_api.core.config import settings
from manage_api.core.security import generate_random_key, hash_password, verify_password
from manage_api.exceptions import (
    EmailAlreadyUsedError,
    InvalidPasswordError,
    LoginAlreadyUsedError,
)
from manage_api.models.authority import ROLE_USER
from manage_api.models.mixins import ANONYMOUS_USER
from manage_api.models.user import DEFAULT_LANGUAGE, User
from manage_api.repositories.authority_repository import AuthorityRepository
from manage_api.repositories.user_repository import UserRepository
from manage_api.schemas.account import RegisterUserAccountVM
from manage_api.services.mail_service import MailService

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # Some backends hand back naive datetimes for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class UserService:
    """
    Service class for the current user's account operations.

    Lookups that may legitimately find nothing (activation key, reset key,
    current login) return None and leave the HTTP mapping to the caller.
    Conflicts and bad credentials raise application exceptions.

    The service flushes but never commits; the request session dependency
    commits once the endpoint returns.
    """

    def __init__(self, session: AsyncSession, mail_service: MailService | None = None):
        """
        Initialize UserService with database session.

        Args:
            session: Async database session
            mail_service: Outgoing mail, a default MailService if omitted
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.authority_repo = AuthorityRepository(session)
        self.mail_service = mail_service or MailService()

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    async def activate_registration(self, key: str) -> User | None:
        """
        Activate the user holding an activation key.

        The key is single use: it is cleared once the account is activated.

        Returns:
            The activated user, or None if no user holds the key
        """
        logger.debug(f"Activating user for activation key {key}")
        user = await self.user_repo.get_by_activation_key(key)
        if user is None:
            logger.warning("Activation failed: unknown activation key")
            return None

        user.activated = True
        user.activation_key = None
        user = await self.user_repo.update(user)

        logger.info(f"Activated user: {user.login}")
        return user

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def register_user(self, account: RegisterUserAccountVM) -> User:
        """
        Register a new, not yet activated, user and mail the activation key.

        An existing account that was never activated does not block the
        login or email: it is removed and replaced.

        Raises:
            LoginAlreadyUsedError: If an activated user has the login
            EmailAlreadyUsedError: If an activated user has the email
        """
        login = account.login.lower()
        email = account.email.lower()

        existing = await self.user_repo.get_by_login(login)
        if existing is not None:
            if existing.activated:
                logger.warning(f"Registration attempted with existing login: {login}")
                raise LoginAlreadyUsedError()
            await self._remove_non_activated_user(existing)

        existing = await self.user_repo.get_by_email(email)
        if existing is not None:
            if existing.activated:
                logger.warning(f"Registration attempted with existing email: {email}")
                raise EmailAlreadyUsedError()
            await self._remove_non_activated_user(existing)

        role_user = await self.authority_repo.get_or_create(ROLE_USER)

        user = User(
            login=login,
            email=email,
            password_hash=hash_password(account.password),
            first_name=account.first_name,
            last_name=account.last_name,
            lang_key=account.lang_key or DEFAULT_LANGUAGE,
            image_url=account.image_url,
            address=account.address,
            phone_number=account.phone_number,
            identity_card_number=account.identity_card_number,
            activated=False,
            activation_key=generate_random_key(),
            created_by=ANONYMOUS_USER,
        )
        user.authorities.append(role_user)
        user = await self.user_repo.add(user)

        logger.info(f"Registered user: {user.login} ({user.email})")

        await self.mail_service.send_activation_email(user)
        return user

    async def _remove_non_activated_user(self, user: User) -> None:
        logger.info(f"Removing non activated user {user.login} before re-registration")
        await self.user_repo.delete(user)

    # ------------------------------------------------------------------
    # Current user
    # ------------------------------------------------------------------

    async def get_user_with_authorities(self, login: str | None) -> User | None:
        """
        Get the user for a login with authorities loaded.

        Returns:
            The user, or None if login is None or unknown
        """
        if not login:
            return None
        return await self.user_repo.get_by_login(login)

    async def update_user(
        self,
        login: str,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        lang_key: str | None,
        image_url: str | None,
        address: str | None,
        phone_number: str | None,
        identity_card_number: str | None,
    ) -> User | None:
        """
        Update basic information (profile and contact fields) for a user.

        The email is stored lowercase. An omitted email keeps the current one,
        so a profile save never leaves the account without a reset address.

        Returns:
            The updated user, or None if the login is unknown

        Raises:
            EmailAlreadyUsedError: If another login already uses the email
        """
        user = await self.user_repo.get_by_login(login)
        if user is None:
            logger.warning(f"Profile update skipped: user not found {login}")
            return None

        if email is not None:
            email = email.lower()
            owner = await self.user_repo.get_by_email(email)
            if owner is not None and owner.login != user.login:
                logger.warning(f"Email {email} already in use by user {owner.login}")
                raise EmailAlreadyUsedError()
            user.email = email

        user.first_name = first_name
        user.last_name = last_name
        user.lang_key = lang_key
        user.image_url = image_url
        user.address = address
        user.phone_number = phone_number
        user.identity_card_number = identity_card_number
        user.updated_by = login
        user = await self.user_repo.update(user)

        logger.info(f"Changed information for user: {user.login}")
        return user

    async def change_password(
        self,
        login: str | None,
        current_password: str | None,
        new_password: str,
    ) -> None:
        """
        Change the password of the user identified by login.

        Does nothing when login is None or unknown.

        Raises:
            InvalidPasswordError: If current_password does not match
        """
        user = await self.get_user_with_authorities(login)
        if user is None:
            logger.warning("Password change skipped: no current user")
            return

        if not verify_password(current_password or "", user.password_hash):
            logger.warning(
                f"Password change failed: invalid current password for user {user.login}"
            )
            raise InvalidPasswordError()

        user.password_hash = hash_password(new_password)
        user.updated_by = user.login
        await self.user_repo.update(user)

        logger.info(f"Changed password for user: {user.login}")

    # ------------------------------------------------------------------
    # Password reset
    # ------------------------------------------------------------------

    async def request_password_reset(self, mail: str) -> User | None:
        """
        Issue a reset key for the activated user registered with an email.

        Returns:
            The user holding the new reset key, or None if no activated user
            has that email
        """
        user = await self.user_repo.get_by_email(mail.strip())
        if user is None or not user.activated:
            logger.warning(f"Password reset requested for unknown email {mail}")
            return None

        user.reset_key = generate_random_key()
        user.reset_date = datetime.now(UTC)
        user = await self.user_repo.update(user)

        logger.info(f"Issued password reset key for user: {user.login}")
        return user

    async def complete_password_reset(self, new_password: str, key: str) -> User | None:
        """
        Set a new password for the user holding a reset key.

        Keys older than settings.reset_key_ttl_hours are refused. The key is
        single use.

        Returns:
            The user, or None if the key is unknown or expired
        """
        logger.debug(f"Reset user password for reset key {key}")
        user = await self.user_repo.get_by_reset_key(key)
        if user is None:
            logger.warning("Password reset failed: unknown reset key")
            return None

        oldest_valid = datetime.now(UTC) - timedelta(hours=settings.reset_key_ttl_hours)
        if user.reset_date is None or _as_utc(user.reset_date) <= oldest_valid:
            logger.warning(f"Password reset failed: expired reset key for user {user.login}")
            return None

        user.password_hash = hash_password(new_password)
        user.reset_key = None
        user.reset_date = None
        user = await self.user_repo.update(user)

        logger.info(f"Password reset completed for user: {user.login}")
        return user
