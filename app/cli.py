"""
Служебные команды: создание первого администратора и таблиц БД.

    review-admin create-tables
    review-admin create-admin --username admin --email admin@journal.org
"""
import argparse
import asyncio
import getpass
import logging
import sys

from app.core.db import engine, SessionLocal
from app.core.exceptions import ReviewServiceError
from app.core.logging import setup_logging
from app.db.base import Base
from app.db import models  # noqa: F401
from app.domains.identity.services import IdentityService

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("Database tables created")


async def create_admin(username: str, email: str, password: str) -> bool:
    """Создание администратора, False если пользователь уже существует"""
    async with SessionLocal() as session:
        admin = await IdentityService(session).bootstrap_admin(username, email, password)
    await engine.dispose()
    return admin is not None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="review-admin", description="Article review service administration")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("create-tables", help="Create database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Provision an admin account")
    admin_parser.add_argument("--username", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", help="Prompted for when omitted")

    return parser


def main(argv=None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    if args.command == "create-tables":
        asyncio.run(create_tables())
        return 0

    password = args.password or getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 2

    try:
        created = asyncio.run(create_admin(args.username, args.email, password))
    except ReviewServiceError as e:
        print(f"Error: {e.detail}", file=sys.stderr)
        return 1

    print("Admin created" if created else f"User {args.username} already exists, nothing to do")
    return 0


if __name__ == "__main__":
    sys.exit(main())
