"""
Create a user row. Run from project root:
  python -m jsonformatter.scripts.create_user USERNAME PASSWORD [--full-name ...] [--email ...]
  python -m jsonformatter.scripts.create_user USERNAME --directory
Local users get a SHA-256 password digest; directory users are verified by LDAP bind.
"""
import argparse
import logging
import sys

from jsonformatter.core.config import get_settings
from jsonformatter.core.database import get_session_factory
from jsonformatter.core.security import hash_password
from jsonformatter.models import AuthType
from jsonformatter.services.credential_store import CredentialStore
from jsonformatter.services.errors import StoreUnavailableError, UserExistsError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a user in user_master (no registration UI).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", nargs="?", default=None, help="Password (local users only)")
    parser.add_argument(
        "--directory",
        action="store_true",
        help="Verify this user against the directory service instead of a local password",
    )
    parser.add_argument("--full-name", default=None)
    parser.add_argument("--email", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=get_settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )

    username = args.username.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if args.directory:
        if args.password:
            print("Directory users do not take a password.", file=sys.stderr)
            return 1
        auth_type = AuthType.DIRECTORY
        digest = None
    else:
        if not args.password:
            print("A password is required for local users.", file=sys.stderr)
            return 1
        auth_type = AuthType.LOCAL
        digest = hash_password(args.password)

    db = get_session_factory()()
    try:
        CredentialStore(db).create_user(
            username,
            digest,
            auth_type,
            full_name=args.full_name,
            email=args.email,
        )
    except UserExistsError as e:
        print(e.message, file=sys.stderr)
        return 1
    except StoreUnavailableError as e:
        logger.error("Database unavailable: %s", e.message)
        return 1
    finally:
        db.close()
    print(f"Created {auth_type.name.lower()} user '{username}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
