"""Mint development bearer tokens for existing or new accounts."""
from __future__ import annotations

import argparse
import sys

from cupid_stage.core.security import create_access_token
from cupid_stage.db.session import session_scope
from cupid_stage.models import User


def mint_token(user_id: int, create_name: str | None = None) -> str:
    """Return a token for ``user_id``, creating the account first when asked.

    Raises:
        LookupError: If the account does not exist and ``create_name`` is empty.
    """
    with session_scope() as db:
        user = db.get(User, user_id)
        if user is None:
            if not create_name:
                raise LookupError(f"user {user_id} does not exist")
            db.add(User(id=user_id, name=create_name))
            db.commit()
    return create_access_token(user_id)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a bearer token for a user id")
    parser.add_argument("user_id", type=int, help="Account id to put in the token subject")
    parser.add_argument(
        "--create",
        metavar="NAME",
        default=None,
        help="Create the account with this display name if it is missing.",
    )
    parser.add_argument(
        "--skip-db",
        action="store_true",
        help="Sign the token without checking the database.",
    )
    args = parser.parse_args(argv)

    if args.user_id <= 0:
        parser.error("user_id must be positive")

    try:
        token = (
            create_access_token(args.user_id)
            if args.skip_db
            else mint_token(args.user_id, args.create)
        )
    except LookupError as exc:
        print(f"[tokens] ERROR: {exc}", file=sys.stderr)
        return 1
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
