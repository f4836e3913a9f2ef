"""
Service layer for business logic.

This package provides service classes that implement business logic
and coordinate between repositories.
"""

from manage_api.services.auth_service import AuthService
from manage_api.services.mail_service import MailService
from manage_api.services.user_service import UserService

__all__ = [
    "AuthService",
    "MailService",
    "UserService",
]
