"""
Account API routes.

REST endpoints for managing the current user's account:
- POST /api/register - Register a new account
- GET  /api/activate - Activate a registered account
- GET  /api/authenticate - Return the login of the authenticated user
- GET  /api/account - Get the current user
- POST /api/account - Update the current user
- POST /api/account/change-password - Change the current user's password
- POST /api/account/reset-password/init - Request a password reset mail
- POST /api/account/reset-password/finish - Reset the password with a mailed key
"""

import logging

from fastapi import APIRouter, Query, Request, Response, status
from fastapi.responses import PlainTextResponse

from manage_api.api.dependencies import (
    CurrentLogin,
    MailServiceDep,
    UserRepositoryDep,
    UserServiceDep,
)
from manage_api.core.config import settings
from manage_api.core.rate_limit import limiter
from manage_api.core.security import check_password_length
from manage_api.exceptions import (
    EmailNotFoundError,
    InternalServerError,
    InvalidPasswordError,
    PasswordNotMatchError,
)
from manage_api.schemas.account import (
    KeyAndPasswordVM,
    PasswordChangeDTO,
    RegisterUserAccountVM,
)
from manage_api.schemas.user import UserDTO

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Account"])


@router.post(
    "/register",
    response_model=UserDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Register a new, not yet activated, account. An activation key is mailed
    to the given address.

    **Rate Limit:** Configurable via RATE_LIMIT_REGISTER (default: 5/hour)
    """,
)
@limiter.limit(settings.rate_limit_register)
async def register_account(
    request: Request,
    account: RegisterUserAccountVM,
    user_service: UserServiceDep,
) -> UserDTO:
    """
    Register the user.

    Raises:
        400: Password length is invalid, passwords differ, or login/email already used
    """
    if not check_password_length(account.password):
        raise InvalidPasswordError()
    if account.password != account.re_password:
        raise PasswordNotMatchError()

    user = await user_service.register_user(account)
    return UserDTO.model_validate(user)


@router.get(
    "/activate",
    response_class=Response,
    summary="Activate the registered user",
)
async def activate_account(
    user_service: UserServiceDep,
    key: str = Query(description="Activation key received by mail"),
) -> Response:
    """
    Activate the registered user.

    Raises:
        500: No user was found for this activation key
    """
    user = await user_service.activate_registration(key)
    if user is None:
        raise InternalServerError("No user was found for this activation key")
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/authenticate",
    response_class=PlainTextResponse,
    summary="Check if the user is authenticated",
    description="Returns the login of the authenticated user, or an empty body.",
)
async def is_authenticated(login: CurrentLogin) -> PlainTextResponse:
    logger.debug("REST request to check if the current user is authenticated")
    return PlainTextResponse(login or "")


@router.get(
    "/account",
    response_model=UserDTO,
    summary="Get the current user",
)
async def get_account(login: CurrentLogin, user_service: UserServiceDep) -> UserDTO:
    """
    Get the current user.

    Raises:
        500: The user couldn't be returned
    """
    user = await user_service.get_user_with_authorities(login)
    if user is None:
        raise InternalServerError("User could not be found")
    return UserDTO.model_validate(user)


@router.post(
    "/account",
    response_class=Response,
    summary="Update the current user information",
)
async def save_account(
    user_dto: UserDTO,
    login: CurrentLogin,
    user_service: UserServiceDep,
    user_repo: UserRepositoryDep,
) -> Response:
    """
    Update the current user information.

    Raises:
        400: The email is already used
        500: The user login wasn't found
    """
    if not login:
        raise InternalServerError("Current user login not found")

    user = await user_repo.get_by_login(login)
    if user is None:
        raise InternalServerError("User could not be found")

    await user_service.update_user(
        login=login,
        first_name=user_dto.first_name,
        last_name=user_dto.last_name,
        email=user_dto.email,
        lang_key=user_dto.lang_key,
        image_url=user_dto.image_url,
        address=user_dto.address,
        phone_number=user_dto.phone_number,
        identity_card_number=user_dto.identity_card_number,
    )
    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "/account/change-password",
    response_class=Response,
    summary="Change the current user's password",
    description="""
    **Rate Limit:** Configurable via RATE_LIMIT_PASSWORD_CHANGE (default: 5/hour)
    """,
)
@limiter.limit(settings.rate_limit_password_change)
async def change_password(
    request: Request,
    password_change: PasswordChangeDTO,
    login: CurrentLogin,
    user_service: UserServiceDep,
) -> Response:
    """
    Change the current user's password.

    Raises:
        400: The new password has an invalid length or the current password is wrong
    """
    if not check_password_length(password_change.new_password):
        raise InvalidPasswordError()

    await user_service.change_password(
        login,
        password_change.current_password,
        password_change.new_password,
    )
    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "/account/reset-password/init",
    response_class=Response,
    summary="Send an email to reset the password of the user",
    description="""
    The body is the raw email address. Nothing is issued unless
    PASSWORD_RESET_MAIL_ENABLED is set.

    **Rate Limit:** Configurable via RATE_LIMIT_PASSWORD_RESET (default: 5/hour)
    """,
)
@limiter.limit(settings.rate_limit_password_reset)
async def request_password_reset(
    request: Request,
    user_service: UserServiceDep,
    mail_service: MailServiceDep,
) -> Response:
    """
    Request a password reset mail.

    Raises:
        400: The email address is not registered (only when reset mail is enabled)
    """
    if not settings.password_reset_mail_enabled:
        logger.debug("Password reset mail disabled; ignoring reset request")
        return Response(status_code=status.HTTP_200_OK)

    try:
        mail = (await request.body()).decode("utf-8").strip()
    except UnicodeDecodeError:
        logger.warning("Password reset requested with a body that is not UTF-8")
        raise EmailNotFoundError()

    user = await user_service.request_password_reset(mail)
    if user is None:
        raise EmailNotFoundError()

    await mail_service.send_password_reset_mail(user)
    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "/account/reset-password/finish",
    response_class=Response,
    summary="Finish to reset the password of the user",
)
async def finish_password_reset(
    key_and_password: KeyAndPasswordVM,
    user_service: UserServiceDep,
) -> Response:
    """
    Reset the password with the generated key.

    Raises:
        400: The new password has an invalid length
        500: The password could not be reset
    """
    if not check_password_length(key_and_password.new_password):
        raise InvalidPasswordError()

    user = await user_service.complete_password_reset(
        key_and_password.new_password,
        key_and_password.key or "",
    )
    if user is None:
        raise InternalServerError("No user was found for this reset key")
    return Response(status_code=status.HTTP_200_OK)
