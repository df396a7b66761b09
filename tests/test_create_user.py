"""Unit tests for the create_user CLI."""

import unittest
from unittest.mock import MagicMock, patch

from jsonformatter.core.security import hash_password
from jsonformatter.models import AuthType
from jsonformatter.scripts.create_user import main
from jsonformatter.services.errors import UserExistsError


@patch("jsonformatter.scripts.create_user.CredentialStore")
@patch("jsonformatter.scripts.create_user.get_session_factory")
class TestCreateUserCli(unittest.TestCase):
    """main() validates arguments, writes one row, and always closes the session."""

    def test_local_user(self, mock_factory: MagicMock, mock_store: MagicMock) -> None:
        self.assertEqual(main(["alice", "correct", "--email", "alice@example.com"]), 0)
        args = mock_store.return_value.create_user.call_args
        self.assertEqual(args.args, ("alice", hash_password("correct"), AuthType.LOCAL))
        self.assertEqual(args.kwargs["email"], "alice@example.com")
        mock_factory.return_value.return_value.close.assert_called_once()

    def test_directory_user(self, mock_factory: MagicMock, mock_store: MagicMock) -> None:
        self.assertEqual(main(["bob", "--directory"]), 0)
        args = mock_store.return_value.create_user.call_args
        self.assertEqual(args.args, ("bob", None, AuthType.DIRECTORY))

    def test_local_user_needs_password(self, mock_factory: MagicMock, mock_store: MagicMock) -> None:
        self.assertEqual(main(["alice"]), 1)
        mock_store.return_value.create_user.assert_not_called()

    def test_directory_user_rejects_password(self, mock_factory: MagicMock, mock_store: MagicMock) -> None:
        self.assertEqual(main(["bob", "pw", "--directory"]), 1)
        mock_store.return_value.create_user.assert_not_called()

    def test_blank_username(self, mock_factory: MagicMock, mock_store: MagicMock) -> None:
        self.assertEqual(main(["  ", "pw"]), 1)

    def test_duplicate(self, mock_factory: MagicMock, mock_store: MagicMock) -> None:
        mock_store.return_value.create_user.side_effect = UserExistsError("alice")
        self.assertEqual(main(["alice", "pw"]), 1)
        mock_factory.return_value.return_value.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
