"""
Authority model and the user/authority association table.
"""

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from manage_api.models.base import Base

ROLE_ADMIN = "ROLE_ADMIN"
ROLE_USER = "ROLE_USER"


user_authorities = Table(
    "user_authorities",
    Base.metadata,
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "authority_id",
        Uuid,
        ForeignKey("authorities.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Authority(Base):
    """
    A named permission granted to users (e.g. ROLE_USER, ROLE_ADMIN).

    Attributes:
        id: UUID primary key
        name: Unique authority name
    """

    __tablename__ = "authorities"

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
    )

    def __repr__(self) -> str:
        return f"Authority(name={self.name})"
