"""
Database models for the account management API.

This module exports all SQLAlchemy models and the declarative base.
Import models from this module to ensure proper initialization.
"""

from manage_api.models.authority import ROLE_ADMIN, ROLE_USER, Authority, user_authorities
from manage_api.models.base import Base
from manage_api.models.mixins import AuditFieldsMixin, TimestampMixin
from manage_api.models.user import User

__all__ = [
    # Base
    "Base",
    # Mixins
    "TimestampMixin",
    "AuditFieldsMixin",
    # User models
    "User",
    "Authority",
    "user_authorities",
    "ROLE_ADMIN",
    "ROLE_USER",
]
