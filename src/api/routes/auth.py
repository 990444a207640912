from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Cookie, Depends, Response, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.token_codec import ITokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AccountInfo,
    LoginUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    RevokeTokenUseCase,
)
from src.app.use_cases.users import GetAccountUseCase
from src.depends import (
    get_current_account_id,
    get_session_policy,
    get_token_codec,
    get_unit_of_work,
)
from src.domain.errors import AuthError, ConflictError, ValidationError
from src.domain.session_policy import SessionPolicy

router = APIRouter(prefix="/auth", tags=["Authentication"])

REFRESH_COOKIE = ApplicationConfig.REFRESH_COOKIE_NAME
REFRESH_COOKIE_PATH = "/auth"


def _set_refresh_cookie(response: Response, token: str, policy: SessionPolicy) -> None:
    """Set the raw session secret as an HttpOnly cookie.

    This cookie is:
    - HttpOnly: Not accessible to JavaScript
    - SameSite: lax by default
    - Path restricted: only sent to /auth endpoints
    - Max-age: the session record's validity window
    """
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=token,
        httponly=True,
        secure=ApplicationConfig.COOKIE_SECURE,
        samesite=ApplicationConfig.COOKIE_SAMESITE,
        max_age=int(policy.session_lifetime.total_seconds()),
        path=REFRESH_COOKIE_PATH,
    )


def _clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(key=REFRESH_COOKIE, path=REFRESH_COOKIE_PATH)


class AuthTokenResponse(BaseModel):
    """Access token plus account; the session secret travels in the cookie"""

    access_token: str
    token_type: str = "bearer"
    account: AccountInfo


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Field rules (non-blank, 8+ char password) are checked by the use case
    so that the error shape matches the rest of the API.
    """

    display_name: str = Field(..., description="Name shown for the account")
    email: str = Field(..., description="Account email address")
    password: str = Field(..., description="Account password (min 8 chars)")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthTokenResponse
)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: ITokenCodec = Depends(get_token_codec),
    policy: SessionPolicy = Depends(get_session_policy),
):
    """
    Register

    Creates an account, returns an access token and sets the refresh cookie.

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid display name, email or password
        - 503 Service Unavailable: Account store unavailable
    """
    command = RegisterCommand(
        display_name=request.display_name, email=request.email, password=request.password
    )

    use_case = RegisterUseCase(uow, codec, policy)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.err_value
        if isinstance(error, ConflictError):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif isinstance(error, ValidationError):
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    data = result.ok_value
    _set_refresh_cookie(response, data.refresh_token, policy)
    return AuthTokenResponse(access_token=data.access_token, account=data.account)


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: str = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthTokenResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: ITokenCodec = Depends(get_token_codec),
    policy: SessionPolicy = Depends(get_session_policy),
):
    """
    Login

    Authenticates and opens a new session.

    Raises:
        - 401 Unauthorized: Invalid credentials (same for unknown email and bad password)
        - 503 Service Unavailable: Account store unavailable
    """
    use_case = LoginUseCase(uow, codec, policy)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.err_value
        if isinstance(error, AuthError):
            raise ClientError(
                AuthError("INVALID_CREDENTIALS", "Invalid credentials"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        raise ServerError(error)

    data = result.ok_value
    _set_refresh_cookie(response, data.refresh_token, policy)
    return AuthTokenResponse(access_token=data.access_token, account=data.account)


class RefreshRequest(BaseModel):
    """Optional body; the refresh cookie is used when it is absent"""

    refresh_token: Optional[str] = Field(None, description="Refresh token")


def _pick_refresh_token(
    request: Optional[RefreshRequest], cookie_value: Optional[str]
) -> str:
    if request is not None and request.refresh_token:
        return request.refresh_token
    return cookie_value or ""


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AccessTokenResponse)
async def refresh(
    response: Response,
    request: Optional[RefreshRequest] = None,
    refresh_cookie: Annotated[Optional[str], Cookie(alias=REFRESH_COOKIE)] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: ITokenCodec = Depends(get_token_codec),
    policy: SessionPolicy = Depends(get_session_policy),
):
    """
    Refresh Access Token

    Rotates the session secret: the presented secret stops working and a new
    one is set in the refresh cookie.

    Raises:
        - 401 Unauthorized: Missing, unknown, expired, revoked or rotated token
        - 503 Service Unavailable: Account store unavailable or contended
    """
    use_case = RefreshTokenUseCase(uow, codec, policy)
    result = await use_case.execute(_pick_refresh_token(request, refresh_cookie))

    if result.is_err():
        error = result.err_value
        if isinstance(error, AuthError):
            raise ClientError(
                AuthError("INVALID_TOKEN", "Refresh failed"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        raise ServerError(error)

    data = result.ok_value
    _set_refresh_cookie(response, data.refresh_token, policy)
    return AccessTokenResponse(access_token=data.access_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    response: Response,
    request: Optional[RefreshRequest] = None,
    refresh_cookie: Annotated[Optional[str], Cookie(alias=REFRESH_COOKIE)] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: ITokenCodec = Depends(get_token_codec),
    policy: SessionPolicy = Depends(get_session_policy),
):
    """
    Logout

    Revokes the session secret (if any) and clears the refresh cookie.
    Always succeeds for unknown, blank or already revoked tokens.
    """
    use_case = RevokeTokenUseCase(uow, codec, policy)
    result = await use_case.execute(_pick_refresh_token(request, refresh_cookie))

    if result.is_err():
        raise ServerError(result.err_value)

    _clear_refresh_cookie(response)


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AccountInfo)
async def me(
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Account

    Raises:
        - 401 Unauthorized: Missing/invalid access token or deleted account
    """
    use_case = GetAccountUseCase(uow)
    result = await use_case.execute(account_id)

    if result.is_err():
        error = result.err_value
        if isinstance(error, AuthError):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.ok_value
