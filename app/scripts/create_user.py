"""
Create an account (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Site Admin" admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal, engine
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, PasswordHasher
from app.models import Base, UserRole
from app.services.user_store import DuplicateKeyError, UserStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account from the command line.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("username", help="Unique username (1-255 chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.user.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    name = args.name.strip()
    username = args.username.strip()
    email = args.email.strip()
    if not name or not username or not email:
        print("Name, username and email must be non-empty.", file=sys.stderr)
        return 1
    if len(username) > 255 or len(email) > 255:
        print("Invalid username or email length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    Base.metadata.create_all(engine)
    hasher = PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)
    db = SessionLocal()
    try:
        store = UserStore(db)
        if store.find_by_email_or_username(email, username) is not None:
            print(f"User '{username}' or email '{email}' already exists.", file=sys.stderr)
            return 1
        try:
            user = store.create(
                name=name,
                user_name=username,
                email=email,
                password_hash=hasher.hash(args.password),
                role=args.role,
            )
        except DuplicateKeyError as e:
            print(f"User already exists: {e.message}", file=sys.stderr)
            return 1
        logger.info("Created user from CLI", extra={"user_id": user.id, "role": args.role})
        print(f"Created user '{username}' with role '{args.role}' (id {user.id}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
