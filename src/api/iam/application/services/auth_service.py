"""Authentication application service for IAM bounded context.

Handles signup, login and resolving the user behind a session token.
"""

from __future__ import annotations

import asyncio
import re

from iam.application.observability import AuthServiceProbe, DefaultAuthServiceProbe
from iam.application.security import (
    DEFAULT_BCRYPT_ROUNDS,
    hash_password,
    verify_password,
)
from iam.application.value_objects import AuthenticatedUser, AuthResult
from iam.domain.aggregates import User
from iam.domain.value_objects import UserId, UserRegistration
from iam.ports.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidLoginError,
    InvalidSignupError,
)
from iam.ports.repositories import IUserRepository
from shared_kernel.auth import TokenClaims, TokenService
from shared_kernel.persistence import ITransactionManager

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 6
DISPLAY_NAME_MAX_LENGTH = 100

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


class AuthService:
    """Application service for user signup and login.

    Passwords are hashed off the event loop; bcrypt at its default work
    factor takes long enough to stall other requests otherwise.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        transactions: ITransactionManager,
        token_service: TokenService,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
        probe: AuthServiceProbe | None = None,
    ):
        """Initialize AuthService with dependencies.

        Args:
            user_repository: Repository for user persistence
            transactions: Transaction boundary for the request
            token_service: Issues session tokens
            bcrypt_rounds: Work factor for new password hashes
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._transactions = transactions
        self._token_service = token_service
        self._bcrypt_rounds = bcrypt_rounds
        self._probe = probe or DefaultAuthServiceProbe()

    async def signup(
        self,
        username: str | None,
        email: str | None,
        password: str | None,
        display_name: str | None = None,
    ) -> AuthResult:
        """Register a new user and issue a session token.

        Args:
            username: Requested username (any case)
            email: Email address (any case)
            password: Plaintext password
            display_name: Optional display name, defaults to the username

        Returns:
            AuthResult with the stored user and a fresh token

        Raises:
            InvalidSignupError: If a field fails validation
            DuplicateUsernameError: If the username is already taken
            DuplicateEmailError: If the email is already registered
        """
        username = (username or "").strip()
        email = (email or "").strip()
        display_name = (display_name or "").strip() or username

        try:
            password = self._validate_signup(username, email, password, display_name)
        except InvalidSignupError as e:
            self._probe.signup_rejected(username=username or None, reason=str(e))
            raise

        password_hash = await asyncio.to_thread(
            hash_password, password, self._bcrypt_rounds
        )
        registration = UserRegistration(
            username=username.lower(),
            email=email.lower(),
            password_hash=password_hash,
            display_name=display_name,
        )

        try:
            async with self._transactions.transaction():
                if await self._user_repository.get_by_username(registration.username):
                    raise DuplicateUsernameError("Username already taken")
                if await self._user_repository.get_by_email(registration.email):
                    raise DuplicateEmailError("Email already registered")
                user = await self._user_repository.create(registration)
        except (DuplicateUsernameError, DuplicateEmailError) as e:
            self._probe.signup_rejected(username=registration.username, reason=str(e))
            raise

        self._probe.user_signed_up(user_id=user.id.value, username=user.username)
        return AuthResult(user=user, token=self._issue(user))

    async def login(self, identifier: str | None, password: str | None) -> AuthResult:
        """Authenticate with an email (or username) and password.

        Args:
            identifier: Email address, or username
            password: Plaintext password

        Returns:
            AuthResult with the user and a fresh token

        Raises:
            InvalidLoginError: If either field is missing
            InvalidCredentialsError: If no user matches or the password is wrong
        """
        identifier = (identifier or "").strip().lower()
        if not identifier or not password:
            raise InvalidLoginError("Email and password are required")

        async def _lookup() -> User | None:
            user = await self._user_repository.get_by_email(identifier)
            if user is None:
                user = await self._user_repository.get_by_username(identifier)
            return user

        user = await self._transactions.read("login", _lookup)
        if user is None:
            self._probe.login_failed(identifier=identifier, reason="unknown_user")
            raise InvalidCredentialsError("Invalid credentials")

        matches = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not matches:
            self._probe.login_failed(identifier=identifier, reason="wrong_password")
            raise InvalidCredentialsError("Invalid credentials")

        self._probe.login_succeeded(user_id=user.id.value, username=user.username)
        return AuthResult(user=user, token=self._issue(user))

    def _issue(self, user: User) -> str:
        return self._token_service.issue_token(
            TokenClaims(id=user.id.value, username=user.username, email=user.email)
        )

    @staticmethod
    def _validate_signup(
        username: str,
        email: str,
        password: str | None,
        display_name: str,
    ) -> str:
        """Check signup fields and return the password, known to be set."""
        if not username or not email or not password:
            raise InvalidSignupError("Username, email and password are required")
        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise InvalidSignupError(
                f"Username must be between {USERNAME_MIN_LENGTH} and "
                f"{USERNAME_MAX_LENGTH} characters"
            )
        if not _USERNAME_PATTERN.match(username):
            raise InvalidSignupError(
                "Username may only contain letters, numbers, dots, dashes and underscores"
            )
        if len(email) > EMAIL_MAX_LENGTH:
            raise InvalidSignupError(
                f"Email must be at most {EMAIL_MAX_LENGTH} characters"
            )
        if not _EMAIL_PATTERN.match(email):
            raise InvalidSignupError("Invalid email address")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise InvalidSignupError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )
        if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
            raise InvalidSignupError(
                f"Display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters"
            )
        return password


def resolve_session(
    token_service: TokenService, token: str | None
) -> AuthenticatedUser | None:
    """Resolve a session token to the user it was issued for.

    Returns None for any token that is missing, malformed, expired or
    signed with another key. No storage is touched.
    """
    claims = token_service.verify_token(token)
    if claims is None or claims.id < 1:
        return None
    return AuthenticatedUser(
        user_id=UserId(value=claims.id),
        username=claims.username,
        email=claims.email,
    )
