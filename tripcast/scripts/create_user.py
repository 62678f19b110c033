"""
Create a user (e.g. the first admin). Run from project root:
  python -m tripcast.scripts.create_user EMAIL PASSWORD FIRST_NAME LAST_NAME [role]
Example:
  python -m tripcast.scripts.create_user admin@example.com your-secure-password Ada Admin ADMIN
"""
import argparse
import logging
import sys

from tripcast.core.config import get_settings
from tripcast.core.database import create_db_engine, create_session_factory, init_db
from tripcast.core.errors import TripcastError
from tripcast.models import Role
from tripcast.services.accounts import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a Tripcast user (sign-up always creates USER accounts)."
    )
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (6-64 chars)")
    parser.add_argument("first_name", help="First name")
    parser.add_argument("last_name", help="Last name")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    settings = get_settings()
    engine = create_db_engine(settings.DATABASE_URL)
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        user = create_user(
            db,
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
            role=Role(args.role),
        )
        print(f"Created user '{user.email}' with role '{user.role.value}'.")
        return 0
    except TripcastError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
