"""Authentication service: registration, credential checks and token issuing."""

from blogging_api.errors.auth import InvalidCredentialsError, UserNotFoundError
from blogging_api.managers.password_manager import verify_and_update_password
from blogging_api.managers.token_manager import create_access_token, decode_access_token
from blogging_api.models import UserDB
from blogging_api.monitoring import get_logger
from blogging_api.repositories import UserRepository
from blogging_api.schemas.user import UserCreate

logger = get_logger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def register(self, user: UserCreate) -> tuple[UserDB, str]:
        """
        Create an account and sign the new user in.

        Raises:
            DuplicateEntryError: If the email is already registered
        """
        db_user = await self.user_repo.create(user)
        logger.info("User registered", user_id=str(db_user.id))
        return db_user, self.issue_token(db_user)

    async def authenticate_user(self, email: str, password: str) -> UserDB:
        """
        Authenticate a user by email and password.

        Unknown emails still run a dummy verification so both failure modes
        take the same time. A hash with outdated parameters is replaced on
        success.

        Returns:
            UserDB: Authenticated user

        Raises:
            InvalidCredentialsError: If authentication fails
        """
        user = await self.user_repo.get_by_email(email)
        is_valid, new_hash = await verify_and_update_password(
            password,
            user.password_hash if user else None,
        )
        if user is None or not is_valid:
            raise InvalidCredentialsError

        if new_hash:
            await self.user_repo.update_password_hash(user, new_hash)
            logger.info("Password hash upgraded", user_id=str(user.id))

        return user

    def issue_token(self, user: UserDB) -> str:
        return create_access_token(user_id=user.id)

    async def resolve_user(self, token: str) -> UserDB:
        """
        Verify a bearer token and load the user it names.

        Raises:
            InvalidTokenError: Malformed or tampered token
            TokenExpiredError: Expired token
            UserNotFoundError: The user no longer exists
        """
        token_data = decode_access_token(token)
        user = await self.user_repo.get_by_id(token_data.user_id)
        if user is None:
            raise UserNotFoundError
        return user
