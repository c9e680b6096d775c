"""User service: register and login against an in-memory store.

User ids are opaque strings; the exchange only compares them for equality
(market creator checks, position ownership, payout addressing).
"""

from src.pm_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.pm_gateway.auth.jwt_handler import create_access_token
from src.pm_gateway.auth.password import hash_password, verify_password
from src.pm_gateway.user.models import User


class UserService:
    """Instantiate once, reuse across requests."""

    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}
        self._by_username: dict[str, User] = {}
        self._emails: set[str] = set()

    def register(self, username: str, email: str, password: str) -> User:
        if username in self._by_username:
            raise UsernameExistsError()
        if email.lower() in self._emails:
            raise EmailExistsError()

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        self._by_id[user.id] = user
        self._by_username[username] = user
        self._emails.add(email.lower())
        return user

    def login(self, username: str, password: str) -> tuple[User, str]:
        """Authenticate user and return (user, access_token).

        Unknown username and wrong password raise the same InvalidCredentialsError.
        """
        user = self._by_username.get(username)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountDisabledError()

        return user, create_access_token(user.id)

    def get(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    def deactivate(self, user_id: str) -> None:
        user = self._by_id.get(user_id)
        if user is not None:
            user.is_active = False


user_service = UserService()
