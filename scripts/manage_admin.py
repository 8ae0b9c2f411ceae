#!/usr/bin/env python3
"""Create or reset an administrator account.

Usage:
  # create or update the admin named in ADMIN_USERNAME / ADMIN_PASSWORD
  python3 scripts/manage_admin.py

  # or pass the credentials explicitly
  python3 scripts/manage_admin.py --username admin --password secret --full-name "Administrator"

This script creates DB tables if they are missing.
"""
import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.exc import SQLAlchemyError

from ordertrack import crud, models
from ordertrack.config.settings import settings
from ordertrack.db import Base, SessionLocal, engine
from ordertrack.logging_config import configure_logging
from ordertrack.schemas import UserCreate

logger = logging.getLogger("manage_admin")


def main():
    parser = argparse.ArgumentParser(description="Create or reset an administrator account")
    parser.add_argument("--username", default=settings.ADMIN_USERNAME)
    parser.add_argument("--password", default=settings.ADMIN_PASSWORD)
    parser.add_argument("--full-name", default="Administrator")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as exc:
        logger.warning("could not create tables on startup: %s", exc)

    with SessionLocal() as db:
        user = crud.get_user_by_username(db, args.username)
        if user:
            logger.info("updating password for existing user %s", args.username)
            user.role = models.UserRole.ADMIN
            user.full_name = args.full_name
            crud.update_user_password(db, user, args.password)
        else:
            logger.info("creating admin user %s", args.username)
            crud.create_user(
                db,
                UserCreate(
                    username=args.username,
                    password=args.password,
                    full_name=args.full_name,
                    role=models.UserRole.ADMIN,
                ),
            )


if __name__ == "__main__":
    main()
