"""HTTP tests for signup, login, logout, whoami and the session gate."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from worldapi.models import User, UserSession
from worldapi.services.users import UserAlreadyExistsError, UserStore

from tests.support import make_app, signup_and_login


class _ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.app = make_app()
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()
        self.app.state.engine.dispose()

    def _db(self):
        return self.app.state.session_factory()


class TestPing(_ApiTestCase):
    def test_ping(self) -> None:
        r = self.client.get("/ping")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.text, "pong")

    def test_health_reports_database(self) -> None:
        r = self.client.get("/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "ok", "environment": "dev", "database": "connected"})


class TestSignupLoginScenario(_ApiTestCase):
    """signup alice/pw1 -> 201, again -> 409, login ok, wrong password -> 403, whoami -> alice."""

    def test_full_scenario(self) -> None:
        r = self.client.post("/signup", json={"username": "alice", "password": "pw1"})
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.content, b"")

        r = self.client.post("/signup", json={"username": "alice", "password": "pw2"})
        self.assertEqual(r.status_code, 409)

        r = self.client.post("/login", json={"username": "alice", "password": "pw1"})
        self.assertEqual(r.status_code, 200)
        self.assertIn("sessions", r.cookies)

        r = self.client.post("/login", json={"username": "alice", "password": "wrong"})
        self.assertEqual(r.status_code, 403)

        r = self.client.get("/whoami")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"username": "alice"})

    def test_duplicate_signup_keeps_original_password(self) -> None:
        self.client.post("/signup", json={"username": "alice", "password": "pw1"})
        db = self._db()
        try:
            before = db.query(User).filter_by(username="alice").one().password_hash
        finally:
            db.close()

        r = self.client.post("/signup", json={"username": "alice", "password": "pw2"})
        self.assertEqual(r.status_code, 409)

        db = self._db()
        try:
            self.assertEqual(db.query(User).filter_by(username="alice").one().password_hash, before)
            self.assertEqual(db.query(User).count(), 1)
        finally:
            db.close()
        self.assertEqual(
            self.client.post("/login", json={"username": "alice", "password": "pw2"}).status_code,
            403,
        )

    def test_capitalized_keys_bind(self) -> None:
        r = self.client.post("/signup", json={"Username": "carol", "Password": "pw"})
        self.assertEqual(r.status_code, 201)
        r = self.client.post("/login", json={"Username": "carol", "Password": "pw"})
        self.assertEqual(r.status_code, 200)

    def test_password_is_stored_hashed(self) -> None:
        self.client.post("/signup", json={"username": "alice", "password": "pw1"})
        db = self._db()
        try:
            stored = db.query(User).filter_by(username="alice").one().password_hash
        finally:
            db.close()
        self.assertNotEqual(stored, "pw1")
        self.assertTrue(stored.startswith("$2"))


class TestSignupValidation(_ApiTestCase):
    def test_empty_username(self) -> None:
        r = self.client.post("/signup", json={"username": "", "password": "pw"})
        self.assertEqual(r.status_code, 400)

    def test_empty_password(self) -> None:
        r = self.client.post("/signup", json={"username": "alice", "password": ""})
        self.assertEqual(r.status_code, 400)

    def test_missing_fields(self) -> None:
        r = self.client.post("/signup", json={})
        self.assertEqual(r.status_code, 400)

    def test_unparsable_body(self) -> None:
        r = self.client.post(
            "/signup", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"detail": "Invalid request body."})

    def test_storage_error_is_generic_500(self) -> None:
        error = OperationalError("SELECT", {}, Exception("connection to db.internal lost"))
        with patch.object(UserStore, "count_users", side_effect=error):
            r = self.client.post("/signup", json={"username": "alice", "password": "pw1"})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"detail": "Internal server error."})
        self.assertNotIn("db.internal", r.text)

    def test_race_lost_on_insert_is_conflict(self) -> None:
        with patch.object(UserStore, "insert_user", side_effect=UserAlreadyExistsError("alice")):
            r = self.client.post("/signup", json={"username": "alice", "password": "pw1"})
        self.assertEqual(r.status_code, 409)


class TestFormBodies(_ApiTestCase):
    """Signup and login bind form-encoded fields the same way as JSON."""

    def test_signup_and_login_with_form(self) -> None:
        r = self.client.post("/signup", data={"username": "bob", "password": "pw"})
        self.assertEqual(r.status_code, 201)
        r = self.client.post("/login", data={"Username": "bob", "Password": "pw"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(self.client.get("/whoami").json(), {"username": "bob"})

    def test_form_with_empty_password(self) -> None:
        r = self.client.post("/signup", data={"username": "bob", "password": ""})
        self.assertEqual(r.status_code, 400)

    def test_form_login_with_wrong_password(self) -> None:
        self.client.post("/signup", data={"username": "bob", "password": "pw"})
        r = self.client.post("/login", data={"username": "bob", "password": "nope"})
        self.assertEqual(r.status_code, 403)


class TestLoginFailures(_ApiTestCase):
    def test_unknown_user_is_forbidden(self) -> None:
        r = self.client.post("/login", json={"username": "ghost", "password": "pw"})
        self.assertEqual(r.status_code, 403)
        self.assertNotIn("sessions", r.cookies)

    def test_storage_error_is_generic_500(self) -> None:
        error = OperationalError("SELECT", {}, Exception("connection to db.internal lost"))
        with patch.object(UserStore, "find_by_username", side_effect=error):
            r = self.client.post("/login", json={"username": "alice", "password": "pw"})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"detail": "Internal server error."})
        self.assertNotIn("db.internal", r.text)

    def test_malformed_stored_hash_is_500(self) -> None:
        db = self._db()
        try:
            db.add(User(username="broken", password_hash="not-a-bcrypt-hash"))
            db.commit()
        finally:
            db.close()
        r = self.client.post("/login", json={"username": "broken", "password": "pw"})
        self.assertEqual(r.status_code, 500)


class TestSessionGateOnRoutes(_ApiTestCase):
    def test_whoami_without_session(self) -> None:
        r = self.client.get("/whoami")
        self.assertEqual(r.status_code, 403)

    def test_whoami_with_forged_cookie(self) -> None:
        self.client.cookies.set("sessions", "forged-value")
        r = self.client.get("/whoami")
        self.assertEqual(r.status_code, 403)

    def test_expired_session_is_rejected_everywhere(self) -> None:
        signup_and_login(self.client)
        db = self._db()
        try:
            for row in db.query(UserSession).all():
                row.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
            db.commit()
        finally:
            db.close()
        self.assertEqual(self.client.get("/whoami").status_code, 403)
        self.assertEqual(self.client.get("/countries").status_code, 403)
        self.assertEqual(self.client.get("/cities/Tokyo").status_code, 403)

    def test_logout_ends_session(self) -> None:
        signup_and_login(self.client)
        self.assertEqual(self.client.get("/whoami").status_code, 200)
        r = self.client.post("/logout")
        self.assertEqual(r.status_code, 204)
        db = self._db()
        try:
            self.assertEqual(db.query(UserSession).count(), 0)
        finally:
            db.close()
        self.client.cookies.clear()
        self.assertEqual(self.client.get("/whoami").status_code, 403)

    def test_logout_without_session(self) -> None:
        self.assertEqual(self.client.post("/logout").status_code, 204)


if __name__ == "__main__":
    unittest.main()
