"""
Pydantic schemas for API request/response validation.
"""

from manage_api.schemas.account import (
    KeyAndPasswordVM,
    PasswordChangeDTO,
    RegisterUserAccountVM,
)
from manage_api.schemas.auth import JWTToken, LoginVM
from manage_api.schemas.user import CamelModel, UserDTO

__all__ = [
    "CamelModel",
    # User schemas
    "UserDTO",
    # Account schemas
    "PasswordChangeDTO",
    "KeyAndPasswordVM",
    "RegisterUserAccountVM",
    # Auth schemas
    "LoginVM",
    "JWTToken",
]
