"""
Users API endpoints.

Phone OTP auth flow:
- Register (create user, send OTP)
- Login (send OTP to a registered number)
- Verify OTP (open a cookie session)
- Logout (clear the session cookie)

Plus the public read API for user records, authenticated by session cookie.
"""

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from ninja import Router
from ninja.errors import HttpError

from apps.accounts.models import User
from apps.accounts.schemas import (
    ErrorDetailResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserOut,
    VerificationSessionOut,
    VerifyOTPRequest,
    VerifyOTPResponse,
)
from apps.accounts.services import (
    AuthResult,
    AuthResultKind,
    register_user,
    start_login,
    verify_login_otp,
)
from apps.core.logging import get_logger
from apps.core.schemas import ErrorResponse, MessageResponse
from apps.core.security import SessionCookieAuth
from apps.core.types import SessionAuthenticatedHttpRequest
from apps.verification.twilio_client import get_otp_provider

logger = get_logger(__name__)
router = Router(tags=["users"])
cookie_auth = SessionCookieAuth()

STATUS_BY_KIND: dict[AuthResultKind, int] = {
    AuthResultKind.OK: 200,
    AuthResultKind.CONFLICT: 409,
    AuthResultKind.NOT_FOUND: 404,
    AuthResultKind.INVALID_CODE: 404,
    AuthResultKind.INTERNAL: 500,
}


def _failure(result: AuthResult, messages: dict[AuthResultKind, str]) -> tuple[int, MessageResponse]:
    # An incomplete OK result is reported as an internal error
    kind = result.kind if result.kind in messages else AuthResultKind.INTERNAL
    return STATUS_BY_KIND[kind], MessageResponse(message=messages[kind])


@router.post(
    "/register",
    response={201: RegisterResponse, 409: MessageResponse, 500: MessageResponse},
    by_alias=True,
    operation_id="registerUser",
    summary="Register a user and send an OTP",
)
def register(request: HttpRequest, payload: RegisterRequest):
    """
    Register a new user by phone number and send a verification code by SMS.

    The phone key is countryCode followed by phoneNumber. Fails with 409 if
    a user with that key already exists.
    """
    result = register_user(
        name=payload.name,
        email=payload.email,
        country_code=payload.country_code,
        phone_number=payload.phone_number,
        provider=get_otp_provider(),
    )

    if result.ok and result.user is not None and result.session is not None:
        return 201, RegisterResponse(
            message="User registered and OTP sent.",
            user=UserOut.from_user(result.user),
            otp_session=VerificationSessionOut.from_session(result.session),
        )

    return _failure(
        result,
        {
            AuthResultKind.CONFLICT: "This number is already in use",
            AuthResultKind.INTERNAL: "Error while generating OTP",
        },
    )


@router.post(
    "/login",
    response={200: LoginResponse, 404: MessageResponse, 500: MessageResponse},
    by_alias=True,
    operation_id="loginUser",
    summary="Send a login OTP",
)
def login(request: HttpRequest, payload: LoginRequest):
    """Send a verification code to a registered phone number."""
    result = start_login(
        country_code=payload.country_code,
        phone_number=payload.phone_number,
        provider=get_otp_provider(),
    )

    if result.ok and result.session is not None:
        return 200, LoginResponse(
            message="OTP sent for login verification.",
            otp_session=result.session.sid,
        )

    return _failure(
        result,
        {
            AuthResultKind.NOT_FOUND: "User not found.",
            AuthResultKind.INTERNAL: "Error in login OTP generation",
        },
    )


@router.post(
    "/verify-otp",
    response={200: VerifyOTPResponse, 404: MessageResponse, 500: ErrorDetailResponse},
    by_alias=True,
    operation_id="verifyOTP",
    summary="Verify an OTP and start a session",
)
def verify_otp(request: HttpRequest, response: HttpResponse, payload: VerifyOTPRequest):
    """
    Check the OTP and, when approved, set the session_token cookie.

    The cookie is HttpOnly, not Secure, with no SameSite attribute, and
    lives as long as the token (one hour).
    """
    result = verify_login_otp(
        country_code=payload.country_code,
        phone_number=payload.phone_number,
        code=payload.code,
        provider=get_otp_provider(),
    )

    if result.ok and result.check is not None and result.token is not None:
        response.set_cookie(
            settings.SESSION_TOKEN_COOKIE_NAME,
            result.token,
            max_age=settings.SESSION_TOKEN_TTL_SECONDS,
            httponly=True,
            secure=False,
        )
        return 200, VerifyOTPResponse(
            message="OTP verified successfully",
            verification_check=VerificationSessionOut.from_session(result.check),
            token=result.token,
        )

    if result.kind == AuthResultKind.INVALID_CODE:
        return STATUS_BY_KIND[result.kind], MessageResponse(message="Invalid OTP")

    return STATUS_BY_KIND[AuthResultKind.INTERNAL], ErrorDetailResponse(
        message="Error during OTP verification",
        error=result.error or "",
    )


@router.post(
    "/logout",
    response={200: MessageResponse, 500: MessageResponse},
    operation_id="logoutUser",
    summary="Clear the session cookie",
)
def logout(request: HttpRequest, response: HttpResponse):
    """
    Clear the session_token cookie.

    Tokens are stateless, so an already issued token stays valid until it
    expires if the client kept a copy.
    """
    try:
        response.delete_cookie(settings.SESSION_TOKEN_COOKIE_NAME)
    except Exception:
        logger.exception("logout_failed")
        return 500, MessageResponse(message="Error during logout")

    logger.info("logged_out")
    return 200, MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response={200: UserOut, 401: ErrorResponse},
    auth=cookie_auth,
    by_alias=True,
    operation_id="getCurrentUser",
    summary="Get the signed-in user",
)
def get_current_user(request: SessionAuthenticatedHttpRequest) -> UserOut:
    """Return the user the session cookie belongs to."""
    return UserOut.from_user(request.auth)


@router.get(
    "/{int:user_id}",
    response={200: UserOut, 401: ErrorResponse, 404: ErrorResponse},
    auth=cookie_auth,
    by_alias=True,
    operation_id="getUser",
    summary="Get a user by ID",
)
def get_user(request: SessionAuthenticatedHttpRequest, user_id: int) -> UserOut:
    """Read a user record. Server-managed fields are not included."""
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise HttpError(404, "User not found.")
    return UserOut.from_user(user)
