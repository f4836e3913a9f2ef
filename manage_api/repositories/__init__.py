"""
Database repositories for the account management API.

This module exports all repository classes for database operations.
"""

from manage_api.repositories.authority_repository import AuthorityRepository
from manage_api.repositories.base import BaseRepository
from manage_api.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "AuthorityRepository",
]
