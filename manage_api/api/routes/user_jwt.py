"""
Authentication API route.

- POST /api/authenticate - Exchange login and password for a JWT token
"""

import logging

from fastapi import APIRouter, Request, Response, status

from manage_api.api.dependencies import AuthServiceDep
from manage_api.core.config import settings
from manage_api.core.rate_limit import limiter
from manage_api.schemas.auth import JWTToken, LoginVM

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post(
    "/authenticate",
    response_model=JWTToken,
    status_code=status.HTTP_200_OK,
    summary="Login with login and password",
    description="""
    Authenticate with login and password to receive a JWT token, returned in
    the body and in the Authorization header.

    **Rate Limit:** Configurable via RATE_LIMIT_AUTHENTICATE (default: 10/minute)
    """,
)
@limiter.limit(settings.rate_limit_authenticate)
async def authorize(
    request: Request,
    response: Response,
    login_vm: LoginVM,
    auth_service: AuthServiceDep,
) -> JWTToken:
    """
    Authenticate and receive a token.

    Raises:
        401: Invalid credentials or account not activated
    """
    token = await auth_service.authenticate(
        username=login_vm.username,
        password=login_vm.password,
        remember_me=login_vm.remember_me,
    )
    response.headers["Authorization"] = f"Bearer {token.id_token}"
    return token
