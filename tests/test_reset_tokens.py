"""Tests for issuing and consuming password reset tokens."""

import re
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest

from reqanalyst.models import User
from reqanalyst.services.auth import AuthService, ResetTokenService
from reqanalyst.services.auth.exceptions import AuthErrorKind, NotifierError
from reqanalyst.services.email_service import EmailResult
from reqanalyst.services.repositories import UserRepository

RESET_URL = re.compile(r"^http://testserver/reset-password/([0-9a-f]{64})$")


@pytest.fixture
def resets(db, email_service):
    return ResetTokenService(db, email_service, app_url="http://testserver/")


@pytest.fixture
def user(db):
    user = UserRepository(db).create(
        email="alice@example.com",
        password_hash=AuthService.hash_password("Secret123"),
        name="Alice",
    )
    db.commit()
    return user


def _sent_token(email_service) -> str:
    """Pull the raw token out of the last reset link handed to the email service."""
    reset_url = email_service.send_password_reset_email.call_args[0][1]
    match = RESET_URL.match(reset_url)
    assert match, reset_url
    return match.group(1)


class TestIssue:
    def test_unknown_email_sends_nothing(self, resets, email_service):
        result = resets.issue("nobody@example.com")

        assert result.success is True
        assert result.preview_url is None
        email_service.send_password_reset_email.assert_not_called()

    def test_known_and_unknown_email_look_the_same(self, resets, user):
        assert resets.issue("nobody@example.com") == resets.issue("alice@example.com")

    def test_stores_only_the_token_hash(self, resets, user, db, email_service):
        before = datetime.now(UTC)
        resets.issue("alice@example.com")

        token = _sent_token(email_service)
        stored = db.get(User, user.id)
        assert stored.reset_token_hash != token
        assert stored.reset_token_hash == AuthService.hash_token(token)

        expires_at = stored.reset_token_expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        assert before + timedelta(hours=23, minutes=59) < expires_at
        assert expires_at <= datetime.now(UTC) + timedelta(hours=24)

    def test_reset_link_sent_to_the_user(self, resets, user, email_service):
        resets.issue("alice@example.com")

        email, reset_url = email_service.send_password_reset_email.call_args[0]
        assert email == "alice@example.com"
        assert RESET_URL.match(reset_url)

    def test_preview_url_passed_through(self, resets, user, email_service):
        email_service.send_password_reset_email.return_value = EmailResult(
            success=True, preview_url="http://testserver/reset-password/preview"
        )

        result = resets.issue("alice@example.com")

        assert result.preview_url == "http://testserver/reset-password/preview"

    def test_notifier_failure(self, resets, user, db, email_service):
        email_service.send_password_reset_email.return_value = EmailResult(success=False)

        with pytest.raises(NotifierError):
            resets.issue("alice@example.com")

        stored = db.get(User, user.id)
        assert stored.reset_token_hash is None
        assert stored.reset_token_expires_at is None
        token = _sent_token(email_service)
        assert resets.consume(token, "NewPass123").success is False

    def test_notifier_failure_keeps_previous_token(self, resets, user, email_service):
        resets.issue("alice@example.com")
        first = _sent_token(email_service)
        email_service.send_password_reset_email.return_value = EmailResult(success=False)

        with pytest.raises(NotifierError):
            resets.issue("alice@example.com")

        assert resets.consume(first, "NewPass123").success is True

    def test_new_token_replaces_old(self, resets, user, email_service):
        resets.issue("alice@example.com")
        first = _sent_token(email_service)
        resets.issue("alice@example.com")
        second = _sent_token(email_service)

        assert first != second
        assert resets.consume(first, "NewPass123").success is False
        assert resets.consume(second, "NewPass123").success is True


class TestConsume:
    def test_sets_new_password_and_clears_token(self, resets, user, db, email_service):
        resets.issue("alice@example.com")
        token = _sent_token(email_service)

        result = resets.consume(token, "NewPass123")

        assert result.success is True
        stored = db.get(User, user.id)
        assert AuthService.verify_password("NewPass123", stored.password_hash)
        assert not AuthService.verify_password("Secret123", stored.password_hash)
        assert stored.reset_token_hash is None
        assert stored.reset_token_expires_at is None

    def test_token_is_single_use(self, resets, user, email_service):
        resets.issue("alice@example.com")
        token = _sent_token(email_service)

        assert resets.consume(token, "NewPass123").success is True
        second = resets.consume(token, "OtherPass123")

        assert second.success is False
        assert second.error == AuthErrorKind.INVALID_OR_EXPIRED_TOKEN

    def test_unknown_token(self, resets, user):
        result = resets.consume("0" * 64, "NewPass123")

        assert result.success is False
        assert result.error == AuthErrorKind.INVALID_OR_EXPIRED_TOKEN

    def test_expired_token(self, resets, user, db, email_service):
        resets.issue("alice@example.com")
        token = _sent_token(email_service)
        UserRepository(db).set_reset_token(
            user.id, AuthService.hash_token(token), datetime.now(UTC) - timedelta(minutes=1)
        )
        db.commit()

        result = resets.consume(token, "NewPass123")

        assert result.success is False
        assert AuthService.verify_password("Secret123", db.get(User, user.id).password_hash)

    def test_concurrent_consumer_loses(self, resets, user, db, email_service):
        """Lookup succeeds but another request consumed the token first."""
        resets.issue("alice@example.com")
        token = _sent_token(email_service)
        assert resets.consume(token, "Winner123").success is True

        stale = db.get(User, user.id)
        with patch.object(UserRepository, "find_by_valid_reset_hash", return_value=stale):
            result = resets.consume(token, "Loser1234")

        assert result.success is False
        assert result.error == AuthErrorKind.INVALID_OR_EXPIRED_TOKEN
        password_hash = db.get(User, user.id).password_hash
        assert AuthService.verify_password("Winner123", password_hash)
        assert not AuthService.verify_password("Loser1234", password_hash)
