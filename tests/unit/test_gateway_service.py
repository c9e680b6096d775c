"""Unit tests for the in-memory user service."""

import pytest
from jose import jwt

from src.pm_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.pm_gateway.user.service import UserService


@pytest.fixture
def service() -> UserService:
    svc = UserService()
    svc.register("alice", "alice@example.com", "Pass1word")
    return svc


class TestRegister:
    def test_new_user_is_active(self, service: UserService) -> None:
        user = service.register("bob", "bob@example.com", "Pass1word")
        assert user.is_active is True
        assert user.password_hash != "Pass1word"
        assert service.get(user.id) is user

    def test_duplicate_username_raises_error(self, service: UserService) -> None:
        with pytest.raises(UsernameExistsError):
            service.register("alice", "new@example.com", "Pass1word")

    def test_duplicate_email_is_case_insensitive(self, service: UserService) -> None:
        with pytest.raises(EmailExistsError):
            service.register("newuser", "ALICE@example.com", "Pass1word")


class TestLogin:
    def test_login_returns_token_for_user(self, service: UserService) -> None:
        user, token = service.login("alice", "Pass1word")
        assert jwt.get_unverified_claims(token)["sub"] == user.id

    def test_wrong_username_raises_credentials_error(self, service: UserService) -> None:
        with pytest.raises(InvalidCredentialsError):
            service.login("nobody", "Pass1word")

    def test_wrong_password_raises_credentials_error(self, service: UserService) -> None:
        with pytest.raises(InvalidCredentialsError):
            service.login("alice", "WrongPass9")

    def test_disabled_account_raises_error(self, service: UserService) -> None:
        user, _ = service.login("alice", "Pass1word")
        service.deactivate(user.id)
        with pytest.raises(AccountDisabledError):
            service.login("alice", "Pass1word")


def test_get_unknown_user_returns_none() -> None:
    assert UserService().get("missing") is None
