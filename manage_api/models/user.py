"""
User model.

A user authenticates with a login and a password, has to activate the
account through an emailed activation key, and can recover the password
with a time-limited reset key.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from manage_api.models.authority import Authority, user_authorities
from manage_api.models.base import Base
from manage_api.models.mixins import AuditFieldsMixin, TimestampMixin

LOGIN_REGEX = r"^[_.@A-Za-z0-9-]*$"
DEFAULT_LANGUAGE = "en"


class User(Base, TimestampMixin, AuditFieldsMixin):
    """
    User model for authentication and profile management.

    Attributes:
        id: UUID primary key
        login: Unique lowercase login
        email: Unique lowercase email address
        password_hash: Argon2id hashed password
        first_name, last_name: Display name parts
        activated: False until the activation key is redeemed
        lang_key: Preferred language code
        image_url: Avatar URL
        activation_key: Key mailed at registration, cleared on activation
        reset_key: Key mailed on password reset request, cleared on use
        reset_date: When reset_key was issued
        address, phone_number, identity_card_number: Contact details
        authorities: Granted authorities
    """

    __tablename__ = "users"

    # Authentication fields
    login: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(254),
        nullable=True,
        unique=True,
        index=True,
    )

    activated: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Profile fields
    first_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    lang_key: Mapped[Optional[str]] = mapped_column(
        String(10),
        nullable=True,
        default=DEFAULT_LANGUAGE,
    )
    image_url: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    identity_card_number: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
    )

    # Account keys
    activation_key: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        index=True,
    )
    reset_key: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        index=True,
    )
    reset_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    authorities: Mapped[list[Authority]] = relationship(
        secondary=user_authorities,
        lazy="selectin",
    )

    @property
    def authority_names(self) -> list[str]:
        return sorted(authority.name for authority in self.authorities)

    def __repr__(self) -> str:
        return f"User(id={self.id}, login={self.login}, email={self.email})"
