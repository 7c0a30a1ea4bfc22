# users/tests/test_session.py
import json
from unittest.mock import patch

import pytest

from users.session import AuthSession
from users.storage import USER_KEY


@pytest.fixture
def session(storage):
    return AuthSession(storage)


class TestRestore:
    """Tests for AuthSession.restore"""

    def test_signed_out(self, session):
        assert session.loading is True

        assert session.restore() is None

        assert session.loading is False
        assert not session.is_authenticated()

    def test_valid_snapshot(self, session, storage):
        storage.save({"username": "alice", "email": "alice@example.com"}, "abc")

        user = session.restore()

        assert user == {"username": "alice", "email": "alice@example.com"}
        assert session.token == "abc"
        assert session.is_authenticated()

    @pytest.mark.parametrize("raw", ["{not json", json.dumps(["alice"]), json.dumps("alice")])
    @patch("users.session.logger")
    def test_corrupt_snapshot_clears_storage(self, mock_logger, session, storage, raw):
        storage.save({}, "abc")
        storage.cache.set(USER_KEY, raw, timeout=None)

        assert session.restore() is None

        assert storage.get_token() is None
        assert storage.get_user_data() is None
        assert session.loading is False
        extra = mock_logger.error.call_args[1]["extra"]
        assert extra["action"] == "session_restore_failed"

    def test_user_without_token(self, session, storage):
        storage.save({"username": "alice"}, None)

        assert session.restore() is None
        assert not session.is_authenticated()


class TestLoginLogout:
    def test_login_persists(self, session, storage):
        session.login({"username": "alice"}, "abc")

        assert session.user == {"username": "alice"}
        assert storage.get_token() == "abc"
        assert session.is_authenticated()

    @patch("users.session.logger")
    def test_logout_clears(self, mock_logger, session, storage):
        session.login({"username": "alice"}, "abc")

        session.logout()

        assert session.user is None
        assert storage.get_token() is None
        assert not session.is_authenticated()
        extra = mock_logger.info.call_args[1]["extra"]
        assert extra["username"] == "alice"
        assert extra["action"] == "session_logout"

    def test_token_removed_behind_the_session(self, session, storage):
        session.login({"username": "alice"}, "abc")

        storage.clear()

        assert not session.is_authenticated()
