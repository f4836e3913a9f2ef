"""
User Pydantic schemas for API request/response handling.

Field names are snake_case in Python and camelCase on the wire
(``firstName``, ``langKey``, ``identityCardNumber``...).
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from manage_api.models.user import LOGIN_REGEX


class CamelModel(BaseModel):
    """Base schema reading camelCase JSON and ORM attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserDTO(CamelModel):
    """
    A user, with his authorities.

    Used as the response of GET /api/account and as the body of
    POST /api/account, where only the profile fields are applied.
    """

    id: uuid.UUID | None = None
    login: str | None = Field(
        default=None,
        min_length=1,
        max_length=50,
        pattern=LOGIN_REGEX,
    )
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = Field(default=None, min_length=5, max_length=254)
    image_url: str | None = Field(default=None, max_length=256)
    activated: bool = False
    lang_key: str | None = Field(default=None, min_length=2, max_length=10)
    address: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=20)
    identity_card_number: str | None = Field(default=None, max_length=20)
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None
    authorities: list[str] = Field(default_factory=list)

    @field_validator("authorities", mode="before")
    @classmethod
    def authority_names(cls, value: Any) -> Any:
        """Accept Authority rows as well as plain names."""
        if value is None:
            return []
        return [getattr(item, "name", item) for item in value]
