"""
Unit tests for UserService.

All tests are fully mocked - no database or external dependencies.
"""

import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from manage_api.core.config import settings
from manage_api.core.security import hash_password, verify_password
from manage_api.exceptions import (
    EmailAlreadyUsedError,
    InvalidPasswordError,
    LoginAlreadyUsedError,
)
from manage_api.models.authority import ROLE_USER, Authority
from manage_api.models.mixins import ANONYMOUS_USER
from manage_api.models.user import User
from manage_api.schemas.account import RegisterUserAccountVM
from manage_api.services.user_service import UserService


@pytest.fixture
def mock_session():
    """Create a mock AsyncSession."""
    return AsyncMock()


@pytest.fixture
def mock_user_repo():
    """Create a mock UserRepository whose writes echo the user back."""
    repo = AsyncMock()
    repo.add.side_effect = lambda user: user
    repo.update.side_effect = lambda user: user
    repo.get_by_login.return_value = None
    repo.get_by_email.return_value = None
    return repo


@pytest.fixture
def mock_authority_repo():
    """Create a mock AuthorityRepository."""
    repo = AsyncMock()
    repo.get_or_create.return_value = Authority(id=uuid.uuid4(), name=ROLE_USER)
    return repo


@pytest.fixture
def mock_mail_service():
    """Create a mock MailService."""
    return AsyncMock()


@pytest.fixture
def user_service(mock_session, mock_user_repo, mock_authority_repo, mock_mail_service):
    """Create UserService with mocked dependencies."""
    with patch("manage_api.services.user_service.UserRepository", return_value=mock_user_repo), \
         patch("manage_api.services.user_service.AuthorityRepository", return_value=mock_authority_repo):
        service = UserService(mock_session, mock_mail_service)
    return service


@pytest.fixture
def active_user():
    """Create an activated User instance with password 'password'."""
    return User(
        id=uuid.uuid4(),
        login="user",
        email="user@example.com",
        password_hash=hash_password("password"),
        activated=True,
        lang_key="en",
    )


@pytest.fixture
def register_account():
    return RegisterUserAccountVM(
        login="NewUser",
        email="NewUser@Example.com",
        password="password",
        re_password="password",
        first_name="New",
    )


class TestActivateRegistration:
    """Test the activate_registration method."""

    @pytest.mark.asyncio
    async def test_activates_and_clears_key(self, user_service, mock_user_repo):
        user = User(login="pending", activated=False, activation_key="key")
        mock_user_repo.get_by_activation_key.return_value = user

        result = await user_service.activate_registration("key")

        assert result is user
        assert user.activated is True
        assert user.activation_key is None
        mock_user_repo.update.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_unknown_key_returns_none(self, user_service, mock_user_repo):
        mock_user_repo.get_by_activation_key.return_value = None

        result = await user_service.activate_registration("unknown")

        assert result is None
        mock_user_repo.update.assert_not_awaited()


class TestRegisterUser:
    """Test the register_user method."""

    @pytest.mark.asyncio
    async def test_register_new_user(
        self, user_service, mock_user_repo, mock_mail_service, register_account
    ):
        user = await user_service.register_user(register_account)

        assert user.login == "newuser"
        assert user.email == "newuser@example.com"
        assert user.activated is False
        assert len(user.activation_key) == 20
        assert user.created_by == ANONYMOUS_USER
        assert user.authority_names == [ROLE_USER]
        assert verify_password("password", user.password_hash)
        mock_user_repo.add.assert_awaited_once()
        mock_mail_service.send_activation_email.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_default_language(self, user_service, register_account):
        user = await user_service.register_user(register_account)

        assert user.lang_key == "en"

    @pytest.mark.asyncio
    async def test_login_used_by_activated_user(
        self, user_service, mock_user_repo, active_user, register_account
    ):
        mock_user_repo.get_by_login.return_value = active_user

        with pytest.raises(LoginAlreadyUsedError):
            await user_service.register_user(register_account)

        mock_user_repo.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_email_used_by_activated_user(
        self, user_service, mock_user_repo, active_user, register_account
    ):
        mock_user_repo.get_by_email.return_value = active_user

        with pytest.raises(EmailAlreadyUsedError):
            await user_service.register_user(register_account)

    @pytest.mark.asyncio
    async def test_replaces_non_activated_user(
        self, user_service, mock_user_repo, register_account
    ):
        """Test that a never activated account does not block the login."""
        stale = User(login="newuser", email="old@example.com", activated=False)
        mock_user_repo.get_by_login.return_value = stale

        user = await user_service.register_user(register_account)

        mock_user_repo.delete.assert_awaited_once_with(stale)
        assert user.login == "newuser"


class TestGetUserWithAuthorities:
    """Test the get_user_with_authorities method."""

    @pytest.mark.asyncio
    async def test_no_login_returns_none(self, user_service, mock_user_repo):
        assert await user_service.get_user_with_authorities(None) is None
        mock_user_repo.get_by_login.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_returns_user(self, user_service, mock_user_repo, active_user):
        mock_user_repo.get_by_login.return_value = active_user

        assert await user_service.get_user_with_authorities("user") is active_user


class TestUpdateUser:
    """Test the update_user method."""

    @staticmethod
    def _profile(**overrides):
        fields = {
            "first_name": "John",
            "last_name": "Doe",
            "email": "John.Doe@Example.com",
            "lang_key": "fr",
            "image_url": "http://placehold.it/50x50",
            "address": "1 Main Street",
            "phone_number": "0123456789",
            "identity_card_number": "ID-42",
        }
        fields.update(overrides)
        return fields

    @pytest.mark.asyncio
    async def test_updates_profile(self, user_service, mock_user_repo, active_user):
        mock_user_repo.get_by_login.return_value = active_user

        result = await user_service.update_user("user", **self._profile())

        assert result.first_name == "John"
        assert result.last_name == "Doe"
        assert result.email == "john.doe@example.com"
        assert result.lang_key == "fr"
        assert result.address == "1 Main Street"
        assert result.phone_number == "0123456789"
        assert result.identity_card_number == "ID-42"
        assert result.updated_by == "user"

    @pytest.mark.asyncio
    async def test_keeps_own_email(self, user_service, mock_user_repo, active_user):
        mock_user_repo.get_by_login.return_value = active_user
        mock_user_repo.get_by_email.return_value = active_user

        result = await user_service.update_user(
            "user", **self._profile(email="user@example.com")
        )

        assert result.email == "user@example.com"

    @pytest.mark.asyncio
    async def test_email_of_other_user(self, user_service, mock_user_repo, active_user):
        mock_user_repo.get_by_login.return_value = active_user
        mock_user_repo.get_by_email.return_value = User(login="other", email="taken@example.com")

        with pytest.raises(EmailAlreadyUsedError):
            await user_service.update_user("user", **self._profile(email="taken@example.com"))

        mock_user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_email_keeps_current(
        self, user_service, mock_user_repo, active_user
    ):
        mock_user_repo.get_by_login.return_value = active_user

        result = await user_service.update_user("user", **self._profile(email=None))

        assert result.email == "user@example.com"
        assert result.first_name == "John"
        mock_user_repo.get_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_login(self, user_service, mock_user_repo):
        result = await user_service.update_user("ghost", **self._profile())

        assert result is None
        mock_user_repo.update.assert_not_awaited()


class TestChangePassword:
    """Test the change_password method."""

    @pytest.mark.asyncio
    async def test_change_password(self, user_service, mock_user_repo, active_user):
        mock_user_repo.get_by_login.return_value = active_user

        await user_service.change_password("user", "password", "new password")

        assert verify_password("new password", active_user.password_hash)
        mock_user_repo.update.assert_awaited_once_with(active_user)

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, user_service, mock_user_repo, active_user):
        mock_user_repo.get_by_login.return_value = active_user

        with pytest.raises(InvalidPasswordError):
            await user_service.change_password("user", "wrong", "new password")

        assert verify_password("password", active_user.password_hash)

    @pytest.mark.asyncio
    async def test_anonymous_is_noop(self, user_service, mock_user_repo):
        await user_service.change_password(None, "password", "new password")

        mock_user_repo.update.assert_not_awaited()


class TestPasswordReset:
    """Test request_password_reset and complete_password_reset."""

    @pytest.mark.asyncio
    async def test_request_issues_key(self, user_service, mock_user_repo, active_user):
        mock_user_repo.get_by_email.return_value = active_user

        result = await user_service.request_password_reset("user@example.com")

        assert result is active_user
        assert len(active_user.reset_key) == 20
        assert active_user.reset_date is not None

    @pytest.mark.asyncio
    async def test_request_ignores_non_activated(self, user_service, mock_user_repo):
        mock_user_repo.get_by_email.return_value = User(login="pending", activated=False)

        assert await user_service.request_password_reset("pending@example.com") is None
        mock_user_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_request_unknown_email(self, user_service):
        assert await user_service.request_password_reset("ghost@example.com") is None

    @pytest.mark.asyncio
    async def test_complete_with_fresh_key(self, user_service, mock_user_repo, active_user):
        active_user.reset_key = "resetkey"
        active_user.reset_date = datetime.now(UTC) - timedelta(hours=1)
        mock_user_repo.get_by_reset_key.return_value = active_user

        result = await user_service.complete_password_reset("new password", "resetkey")

        assert result is active_user
        assert active_user.reset_key is None
        assert active_user.reset_date is None
        assert verify_password("new password", active_user.password_hash)

    @pytest.mark.asyncio
    async def test_complete_accepts_naive_reset_date(
        self, user_service, mock_user_repo, active_user
    ):
        """Test that a naive timestamp read back from the database is treated as UTC."""
        active_user.reset_key = "resetkey"
        active_user.reset_date = datetime.now(UTC).replace(tzinfo=None)
        mock_user_repo.get_by_reset_key.return_value = active_user

        assert await user_service.complete_password_reset("new password", "resetkey") is active_user

    @pytest.mark.asyncio
    async def test_complete_with_expired_key(self, user_service, mock_user_repo, active_user):
        active_user.reset_key = "resetkey"
        active_user.reset_date = datetime.now(UTC) - timedelta(
            hours=settings.reset_key_ttl_hours + 1
        )
        mock_user_repo.get_by_reset_key.return_value = active_user

        result = await user_service.complete_password_reset("new password", "resetkey")

        assert result is None
        assert verify_password("password", active_user.password_hash)

    @pytest.mark.asyncio
    async def test_complete_with_unknown_key(self, user_service, mock_user_repo):
        mock_user_repo.get_by_reset_key.return_value = None

        assert await user_service.complete_password_reset("new password", "nope") is None
