"""Authentication routes: registration, login and the caller's profile."""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from blogging_api.dependencies import AuthServiceDep, CurrentUserDep, UserRepoDep
from blogging_api.errors.validation import BadRequestError
from blogging_api.models import UserDB
from blogging_api.routes.examples import (
    RATE_LIMITED,
    TOKEN_EXAMPLE,
    UNAUTHORIZED,
    USER_EXAMPLE,
    error_example,
)
from blogging_api.schemas.auth import AuthResponse
from blogging_api.schemas.user import (
    LoginRequest,
    UserCreate,
    UserData,
    UserEnvelope,
    UserResponse,
    UserUpdate,
)

router = APIRouter(prefix="/api/auth", tags=["🔐 Auth"])


def user_data(user: UserDB) -> UserData:
    """Wrap a user row in the ``data`` payload, dropping the password hash."""
    return UserData(user=UserResponse.model_validate(user, from_attributes=True))


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and receive a bearer token for it.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "message": "User registered successfully",
                        "token": TOKEN_EXAMPLE,
                        "data": {"user": USER_EXAMPLE},
                    },
                },
            },
        },
        400: error_example(
            "Validation failed",
            "Validation failed",
            ["email: value is not a valid email address"],
        ),
        409: error_example("Conflict", "User with this email already exists"),
        429: RATE_LIMITED,
    },
    operation_id="auth_register",
)
async def register_user(
    user_create: UserCreate,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    """
    Register a new user.

    Parameters
    ----------
    user_create : UserCreate
        User registration data.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResponse
        The new user's public profile and a bearer token.

    Raises
    ------
    DuplicateEntryError
        If the email is already registered.
    """
    user, token = await auth_service.register(user_create)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        data=user_data(user),
    )


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Login for access token",
    description="Authenticate with email and password to obtain a bearer token.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "message": "Login successful",
                        "token": TOKEN_EXAMPLE,
                        "data": {"user": USER_EXAMPLE},
                    },
                },
            },
        },
        401: error_example("Unauthorized", "Invalid email or password"),
        429: RATE_LIMITED,
    },
    operation_id="auth_login",
)
async def login(
    credentials: LoginRequest,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    """
    Login with email and password.

    Raises
    ------
    InvalidCredentialsError
        If no user has this email or the password is wrong.
    """
    user = await auth_service.authenticate_user(
        credentials.email,
        credentials.password.get_secret_value(),
    )
    return AuthResponse(
        message="Login successful",
        token=auth_service.issue_token(user),
        data=user_data(user),
    )


@router.get(
    "/profile",
    response_class=ORJSONResponse,
    response_model=UserEnvelope,
    response_model_exclude_none=True,
    summary="Get current user",
    description="Retrieve the profile of the currently authenticated user.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"status": "success", "data": {"user": USER_EXAMPLE}},
                },
            },
        },
        401: UNAUTHORIZED,
        429: RATE_LIMITED,
    },
    operation_id="auth_profile",
)
async def get_profile(current_user: CurrentUserDep) -> UserEnvelope:
    return UserEnvelope(data=user_data(current_user))


@router.patch(
    "/profile",
    response_class=ORJSONResponse,
    response_model=UserEnvelope,
    response_model_exclude_none=True,
    summary="Update current user",
    description="Change first name, last name or email. Passwords cannot be changed here.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "message": "Profile updated successfully",
                        "data": {"user": USER_EXAMPLE},
                    },
                },
            },
        },
        400: error_example("Bad Request", "Password updates not allowed through this endpoint"),
        401: UNAUTHORIZED,
        409: error_example("Conflict", "Email already in use"),
        429: RATE_LIMITED,
    },
    operation_id="auth_update_profile",
)
async def update_profile(
    changes: UserUpdate,
    current_user: CurrentUserDep,
    repo: UserRepoDep,
) -> UserEnvelope:
    """
    Update the caller's profile.

    Parameters
    ----------
    changes : UserUpdate
        Fields to change; at least one is required.
    current_user : UserDB
        Authenticated user (resolved by dependency).
    repo : UserRepository
        User repository dependency.

    Raises
    ------
    BadRequestError
        If the body tries to change the password.
    DuplicateEntryError
        If the new email is used by another account.
    """
    if changes.password is not None:
        mssg = "Password updates not allowed through this endpoint"
        raise BadRequestError(mssg)

    user = await repo.update(current_user, changes)
    return UserEnvelope(message="Profile updated successfully", data=user_data(user))
