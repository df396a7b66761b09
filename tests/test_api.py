"""Endpoint tests for the FastAPI app with the database and directory replaced by mocks."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from pydantic import SecretStr

from jsonformatter.api.auth import get_authenticator
from jsonformatter.api.encryption import get_encryption_service
from jsonformatter.core.config import Settings, get_settings
from jsonformatter.core.database import get_db
from jsonformatter.core.security import create_access_token, hash_password
from jsonformatter.main import app
from jsonformatter.models import User
from jsonformatter.services.authentication import Authenticator
from jsonformatter.services.encryption import EncryptionService

SETTINGS = Settings(
    JWT_SECRET=SecretStr("api-test-signing-key-0123456789abcdef"),
    JWT_ISSUER="test-issuer",
    JWT_AUDIENCE="test-audience",
    ENCRYPTION_WEB_KEY=SecretStr("web-secret"),
    ENCRYPTION_BACKEND_KEY=SecretStr("backend-secret"),
)

ALICE = User(
    user_id=7,
    user_name="alice",
    user_password=hash_password("correct"),
    is_active=True,
    user_auth_type=1,
)


class ApiTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.encryption_service = EncryptionService(SETTINGS)

    def setUp(self) -> None:
        self.store = MagicMock()
        self.store.find_by_user_name.side_effect = lambda name: ALICE if name == "alice" else None
        self.directory = MagicMock()
        self.db = MagicMock()
        app.dependency_overrides[get_settings] = lambda: SETTINGS
        app.dependency_overrides[get_authenticator] = lambda: Authenticator(
            self.store, self.directory, SETTINGS
        )
        app.dependency_overrides[get_encryption_service] = lambda: self.encryption_service
        app.dependency_overrides[get_db] = lambda: self.db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def _auth_header(self, now: datetime | None = None) -> dict[str, str]:
        token = create_access_token(7, "alice", SETTINGS, now=now)
        return {"Authorization": f"Bearer {token}"}


class TestAuthenticateEndpoint(ApiTestCase):
    """POST /api/User/Authenticate always answers with the {isSuccess, data} envelope."""

    def test_success(self) -> None:
        resp = self.client.post("/api/User/Authenticate", json={"userName": "alice", "password": "correct"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["isSuccess"])
        self.assertTrue(body["data"]["token"])
        self.assertEqual(body["data"]["authenticationTypeID"], 1)
        self.assertEqual(body["data"]["message"], "Login successful.")

    def test_unknown_user(self) -> None:
        resp = self.client.post("/api/User/Authenticate", json={"userName": "ghost", "password": "x"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertFalse(body["isSuccess"])
        self.assertIn("Invalid UserName", body["data"]["message"])
        self.assertNotIn("token", body["data"])
        self.assertNotIn("authenticationTypeID", body["data"])

    def test_wrong_password(self) -> None:
        resp = self.client.post("/api/User/Authenticate", json={"userName": "alice", "password": "wrong"})
        body = resp.json()
        self.assertFalse(body["isSuccess"])
        self.assertIn("Incorrect", body["data"]["message"])

    def test_missing_fields_are_invalid_input(self) -> None:
        resp = self.client.post("/api/User/Authenticate", json={})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["message"], "Username and password are required.")
        self.store.find_by_user_name.assert_not_called()


class TestAuthenticateMalformedBody(ApiTestCase):
    """Bodies that fail validation still get the login envelope, not a raw 422."""

    def test_wrong_field_types(self) -> None:
        for payload in ({"userName": 123, "password": "x"}, {"userName": "alice", "password": ["x"]}):
            with self.subTest(payload=payload):
                resp = self.client.post("/api/User/Authenticate", json=payload)
                self.assertEqual(resp.status_code, 200)
                self.assertEqual(
                    resp.json(),
                    {"isSuccess": False, "data": {"message": "Username and password are required."}},
                )
        self.store.find_by_user_name.assert_not_called()

    def test_body_not_json(self) -> None:
        resp = self.client.post(
            "/api/User/Authenticate",
            content=b"userName=alice&password=correct",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["isSuccess"])
        self.assertNotIn("token", resp.json()["data"])

    def test_other_routes_keep_422(self) -> None:
        resp = self.client.post(
            "/Admin/UserMasterInsert",
            json=[{"fullname": "no user name"}],
            headers=self._auth_header(),
        )
        self.assertEqual(resp.status_code, 422)
        self.assertIn("detail", resp.json())


class TestLogoutEndpoint(ApiTestCase):
    def test_logout(self) -> None:
        resp = self.client.post("/api/User/Logout")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"isSuccess": True, "data": {"message": "Logout Successful"}})


class TestEncryptionEndpoints(ApiTestCase):
    """Encrypt/decrypt require a valid bearer token and wrap results in an envelope."""

    def test_requires_token(self) -> None:
        resp = self.client.post(
            "/api/EncryptDecryptController/encrypt", json={"target": "1", "plainText": "hi"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_rejects_garbage_token(self) -> None:
        resp = self.client.post(
            "/api/EncryptDecryptController/encrypt",
            json={"target": "1", "plainText": "hi"},
            headers={"Authorization": "Bearer not.a.jwt"},
        )
        self.assertEqual(resp.status_code, 401)

    def test_rejects_expired_token(self) -> None:
        headers = self._auth_header(now=datetime.now(UTC) - timedelta(minutes=61))
        resp = self.client.post(
            "/api/EncryptDecryptController/encrypt",
            json={"target": "1", "plainText": "hi"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 401)

    def test_login_token_round_trip(self) -> None:
        login = self.client.post("/api/User/Authenticate", json={"userName": "alice", "password": "correct"})
        headers = {"Authorization": f"Bearer {login.json()['data']['token']}"}
        enc = self.client.post(
            "/api/EncryptDecryptController/encrypt",
            json={"target": "2", "plainText": "secret text"},
            headers=headers,
        ).json()
        self.assertTrue(enc["isSuccess"])
        dec = self.client.post(
            "/api/EncryptDecryptController/decrypt",
            json={"target": "2", "plainText": enc["data"]["encryptedText"]},
            headers=headers,
        ).json()
        self.assertEqual(dec, {"isSuccess": True, "data": {"decryptedText": "secret text"}})

    def test_invalid_target(self) -> None:
        resp = self.client.post(
            "/api/EncryptDecryptController/encrypt",
            json={"target": "9", "plainText": "hi"},
            headers=self._auth_header(),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"isSuccess": False, "data": {"encryptedText": "An error occurred during encryption."}},
        )

    def test_unconfigured_target_decrypt(self) -> None:
        resp = self.client.post(
            "/api/EncryptDecryptController/decrypt",
            json={"target": "3", "plainText": "abc"},
            headers=self._auth_header(),
        )
        self.assertEqual(
            resp.json(),
            {"isSuccess": False, "data": {"decryptedText": "An error occurred during decryption."}},
        )


class TestEncryptionUsesInjectedSettings(ApiTestCase):
    """The encryption service is built from the settings dependency, so overriding it is enough."""

    def setUp(self) -> None:
        super().setUp()
        del app.dependency_overrides[get_encryption_service]

    def test_keys_come_from_overridden_settings(self) -> None:
        headers = self._auth_header()
        enc = self.client.post(
            "/api/EncryptDecryptController/encrypt",
            json={"target": "1", "plainText": "hello"},
            headers=headers,
        ).json()
        self.assertTrue(enc["isSuccess"])
        self.assertEqual(
            self.encryption_service.decrypt("1", enc["data"]["encryptedText"]),
            "hello",
        )

    def test_target_missing_from_overridden_settings(self) -> None:
        resp = self.client.post(
            "/api/EncryptDecryptController/encrypt",
            json={"target": "3", "plainText": "hello"},
            headers=self._auth_header(),
        )
        self.assertFalse(resp.json()["isSuccess"])


class TestAdminEndpoint(ApiTestCase):
    """POST /Admin/UserMasterInsert upserts rows and reports a status string."""

    def test_requires_token(self) -> None:
        resp = self.client.post("/Admin/UserMasterInsert", json=[{"userName": "bob"}])
        self.assertEqual(resp.status_code, 401)

    @patch("jsonformatter.api.admin.CredentialStore")
    def test_success(self, mock_store: MagicMock) -> None:
        mock_store.return_value.upsert_users.return_value = 1
        resp = self.client.post(
            "/Admin/UserMasterInsert",
            json=[{"userName": "bob", "fullname": "Bob B", "email": "bob@example.com"}],
            headers=self._auth_header(),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), "DB operation succeed")
        mock_store.assert_called_once_with(self.db)
        rows = mock_store.return_value.upsert_users.call_args.args[0]
        self.assertEqual(rows[0].user_name, "bob")
        self.assertEqual(rows[0].full_name, "Bob B")

    @patch("jsonformatter.api.admin.CredentialStore")
    def test_failure(self, mock_store: MagicMock) -> None:
        mock_store.return_value.upsert_users.side_effect = RuntimeError("db down")
        resp = self.client.post(
            "/Admin/UserMasterInsert",
            json=[{"userName": "bob"}],
            headers=self._auth_header(),
        )
        self.assertEqual(resp.json(), "DB operation failed!!")


class TestHealthEndpoint(ApiTestCase):
    def test_connected(self) -> None:
        resp = self.client.get("/api/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")

    def test_disconnected(self) -> None:
        self.db.execute.side_effect = RuntimeError("no db")
        resp = self.client.get("/api/health/")
        self.assertEqual(resp.json()["database"], "disconnected")


if __name__ == "__main__":
    unittest.main()
