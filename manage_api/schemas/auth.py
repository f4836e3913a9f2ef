"""
Authentication Pydantic schemas for API request/response handling.
"""

from pydantic import BaseModel, Field

from manage_api.schemas.user import CamelModel


class LoginVM(CamelModel):
    """
    Credentials posted to POST /api/authenticate.

    Attributes:
        username: User login
        password: User password
        remember_me: Issue a long-lived token
    """

    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=100)
    remember_me: bool = False


class JWTToken(BaseModel):
    """
    Token returned after a successful authentication.

    Serialized as ``{"id_token": "..."}``.
    """

    id_token: str = Field(description="JWT bearer token")
