"""
Create a user from the command line. Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD FIRSTNAME LASTNAME [role]
Example:
  python -m app.scripts.create_user jdoe s3cret Jane Doe admin
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal, engine
from app.models import ROLES, Base
from app.schemas.users import UserCreate
from app.services.user_store import UserServiceError, UserStore
from app.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user-directory account.")
    parser.add_argument("username", help="Username (1-255 chars, unique)")
    parser.add_argument("password", help="Password (stored as a bcrypt hash)")
    parser.add_argument("firstname", help="First name")
    parser.add_argument("lastname", help="Last name")
    parser.add_argument("role", nargs="?", default="user", choices=list(ROLES))
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        user = create_user(
            UserStore(db),
            UserCreate(
                username=username,
                firstname=args.firstname.strip(),
                lastname=args.lastname.strip(),
                password=args.password,
                role=args.role,
            ),
        )
    except UserServiceError as e:
        print(f"Could not create user '{username}': {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
