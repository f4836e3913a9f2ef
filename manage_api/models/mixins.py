"""
Reusable mixins for database models.

This module provides mixins for common model patterns:
- TimestampMixin: created_at and updated_at timestamps
- AuditFieldsMixin: created_by and updated_by login tracking
"""

from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

# Recorded as the author of changes made without an authenticated user
SYSTEM_ACCOUNT = "system"
ANONYMOUS_USER = "anonymoususer"


class TimestampMixin:
    """
    Mixin to add timestamp columns to models.

    Adds:
    - created_at: Timestamp when record was created (auto-set)
    - updated_at: Timestamp when record was last updated (auto-updated)

    Both timestamps use UTC timezone.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )


class AuditFieldsMixin:
    """
    Mixin to track who created and updated records.

    Adds:
    - created_by: login of the user who created the record
    - updated_by: login of the user who last updated the record

    Self-registration records ANONYMOUS_USER as creator, since nobody is
    authenticated at that point.

    Setting audit fields:
        user.updated_by = current_login
    """

    created_by: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=SYSTEM_ACCOUNT,
    )

    updated_by: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
