"""
Account request schemas: registration, password change and password reset.

Password fields carry no length constraint here. Their length is checked by
the account routes so that a bad length yields 400 INVALID_PASSWORD instead
of a 422 validation error.
"""

from pydantic import EmailStr, Field

from manage_api.models.user import LOGIN_REGEX
from manage_api.schemas.user import CamelModel


class PasswordChangeDTO(CamelModel):
    """
    Body of POST /api/account/change-password.

    Attributes:
        current_password: Password the user has today
        new_password: Replacement password
    """

    current_password: str | None = None
    new_password: str | None = None


class KeyAndPasswordVM(CamelModel):
    """
    Body of POST /api/account/reset-password/finish.

    Attributes:
        key: Reset key received by mail
        new_password: Replacement password
    """

    key: str | None = None
    new_password: str | None = None


class RegisterUserAccountVM(CamelModel):
    """
    Body of POST /api/register.

    ``re_password`` is the confirmation typed a second time and is sent as
    ``rePassword``.
    """

    login: str = Field(min_length=1, max_length=50, pattern=LOGIN_REGEX)
    email: EmailStr = Field(min_length=5, max_length=254)
    password: str | None = None
    re_password: str | None = None
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    lang_key: str | None = Field(default=None, min_length=2, max_length=10)
    image_url: str | None = Field(default=None, max_length=256)
    address: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=20)
    identity_card_number: str | None = Field(default=None, max_length=20)
