#!/usr/bin/env python3
"""Create an admin account without going through the HTTP API.

Useful when ALLOW_ADMIN_REGISTRATION=false.

Usage:
    cd backend
    python -m scripts.create_admin --name "Ops" --email ops@example.com
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session  # noqa: E402

from app.db.database import create_db_and_tables, engine  # noqa: E402
from app.engines.accounts import AccountStore  # noqa: E402
from app.models.user import Role  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
logger = logging.getLogger("create_admin")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a TaskDesk admin account")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if not password:
        logger.error("Password must not be empty")
        return 1

    create_db_and_tables()
    with Session(engine) as session:
        accounts = AccountStore(session)
        if accounts.email_taken(args.email):
            logger.error("User already exists: %s", args.email)
            return 1
        user = accounts.create(name=args.name, email=args.email, password=password, role=Role.ADMIN)

    logger.info("Created admin %s (%s)", user.id, args.email)
    return 0


if __name__ == "__main__":
    sys.exit(main())
