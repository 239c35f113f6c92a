"""Unit tests for the session cleanup job and the create_user script."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError

from worldapi import session_cleanup
from worldapi.scripts import create_user

from tests.support import make_settings


class TestSessionCleanup(unittest.TestCase):
    """session_cleanup.main purges expired sessions and reports failures by exit code."""

    def _run(self, gate: MagicMock) -> tuple[int, MagicMock]:
        db = MagicMock()
        with (
            patch.object(session_cleanup, "get_settings", return_value=make_settings()),
            patch.object(session_cleanup, "build_engine"),
            patch.object(session_cleanup, "build_session_factory", return_value=lambda: db),
            patch.object(session_cleanup, "SessionGate", return_value=gate),
        ):
            return session_cleanup.main(), db

    def test_purges_and_exits_zero(self) -> None:
        gate = MagicMock()
        gate.purge_expired.return_value = 3
        code, db = self._run(gate)
        self.assertEqual(code, 0)
        gate.purge_expired.assert_called_once()
        db.close.assert_called_once()

    def test_storage_failure_exits_one(self) -> None:
        gate = MagicMock()
        gate.purge_expired.side_effect = OperationalError("DELETE", {}, Exception("down"))
        code, db = self._run(gate)
        self.assertEqual(code, 1)
        db.close.assert_called_once()


class TestCreateUser(unittest.TestCase):
    def _run(self, argv: list[str], store: MagicMock) -> int:
        with (
            patch.object(create_user, "get_settings", return_value=make_settings()),
            patch.object(create_user, "build_engine"),
            patch.object(create_user, "build_session_factory", return_value=MagicMock),
            patch.object(create_user, "UserStore", return_value=store),
        ):
            return create_user.main(argv)

    def test_creates_new_user(self) -> None:
        store = MagicMock()
        store.count_users.return_value = 0
        self.assertEqual(self._run(["alice", "pw1"], store), 0)
        username, password_hash = store.insert_user.call_args.args
        self.assertEqual(username, "alice")
        self.assertNotEqual(password_hash, "pw1")

    def test_existing_user_is_refused(self) -> None:
        store = MagicMock()
        store.count_users.return_value = 1
        self.assertEqual(self._run(["alice", "pw1"], store), 1)
        store.insert_user.assert_not_called()

    def test_blank_username_is_refused(self) -> None:
        store = MagicMock()
        self.assertEqual(self._run(["  ", "pw1"], store), 1)
        store.count_users.assert_not_called()


if __name__ == "__main__":
    unittest.main()
