"""
Password hashing using Argon2id through passlib's CryptContext.

Hashing is CPU-bound, so the async helpers run it on a small thread pool
instead of the event loop.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from blogging_api.configs import CONFIG_MAP, settings
from blogging_api.decorators import with_retry
from blogging_api.errors import PasswordHashingError, PasswordRehashError
from blogging_api.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    Argon2id password hasher.

    Wraps passlib's CryptContext to provide:
    - hashing with Argon2id at the configured security level
    - verification
    - transparent upgrade of deprecated (pbkdf2) or under-cost hashes
    """

    def __init__(self, level: str | None = None) -> None:
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        config = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
            argon2__memory_cost=config.memory_cost,
            argon2__time_cost=config.time_cost,
            argon2__parallelism=config.parallelism,
        )
        logger.info(f"PasswordHasher initialized with Argon2id on level {self.level}")

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            ValueError: If the password is empty, too long or not encodable.
            PasswordHashingError: If the backend fails.
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg)

        try:
            hashed_password = self.pwd_context.hash(password)
        except InternalBackendError as e:
            logger.exception("Password hashing backend failed")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e
        except (ValueError, UnicodeError) as e:
            logger.warning(f"Rejected password input: {type(e).__name__}")
            mssg = "Invalid password format"
            raise ValueError(mssg) from e
        return hashed_password

    def verify(self, password: str, hashed_password: str) -> bool:
        """Return True when ``password`` matches ``hashed_password``; corrupt hashes never match."""
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def check_needs_rehash(self, hashed_password: str) -> bool:
        """Whether the hash uses a deprecated scheme or outdated parameters."""
        try:
            needs_rehash = self.pwd_context.needs_update(hashed_password)
        except ValueError:
            logger.exception(f"Error checking hash currency on level {self.level}")
            return False

        if needs_rehash:
            logger.info(f"Hash needs update on level {self.level}")
        return needs_rehash

    def verify_and_update(
        self,
        password: str,
        hashed_password: str | None,
    ) -> tuple[bool, str | None]:
        """
        Verify a password and return a fresh hash when the stored one is outdated.

        A missing hash still costs one verification so unknown accounts take
        as long to reject as wrong passwords.

        Returns:
            tuple[bool, str | None]: Whether the password matched, and the
            replacement hash if one should be stored.
        """
        if hashed_password is None:
            self.pwd_context.dummy_verify()
            return False, None

        if not self.verify(password, hashed_password):
            return False, None

        new_hash = None
        if self.check_needs_rehash(hashed_password):
            try:
                new_hash = self.hash(password)
            except PasswordHashingError as e:
                mssg = "Failed to rehash password"
                raise PasswordRehashError(mssg) from e

        return True, new_hash


_default_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Return the process-wide hasher, creating it on first use."""
    global _default_hasher  # noqa: PLW0603
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def hash_password(password: str) -> str:
    """Hash ``password`` off the event loop; backend failures are retried, bad input is not."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


async def verify_password(password: str, hashed_password: str) -> bool:
    """Verify ``password`` off the event loop."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        hashed_password,
    )


async def verify_and_update_password(
    password: str,
    hashed_password: str | None,
) -> tuple[bool, str | None]:
    """Verify ``password`` and get a replacement hash when needed, off the event loop."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify_and_update,
        password,
        hashed_password,
    )
