"""
Seed a user account.

Usage:
    python -m backend.scripts.create_user --name "Test User" --email test@example.com --password secret
    python -m backend.scripts.create_user ... --token deploy-check

Creates the user (email marked verified) and optionally prints a fresh
personal access token for it.

Dependencies: backend.application.services, backend.boundary.db
System role: Operator helper for local and staging environments
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from backend.application.services import TokenService, UserService
from backend.boundary.db import get_async_engine, get_async_session_factory
from backend.configs import get_settings
from backend.core.exceptions import ValidationError
from backend.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument(
        "--token",
        metavar="DEVICE_NAME",
        help="Also issue an API token with this name and print it",
    )
    return parser


async def create_user(
    name: str,
    email: str,
    password: str,
    token_name: Optional[str] = None,
) -> Optional[str]:
    """
    Create a verified user and optionally issue a token.

    Returns:
        str: Plain-text token when token_name is given, else None

    Raises:
        ValidationError: Missing fields or duplicate email
    """
    settings = get_settings()
    engine = get_async_engine(settings)
    SessionFactory = get_async_session_factory(engine)
    try:
        async with SessionFactory() as session:
            user = await UserService(session).register(
                name=name,
                email=email,
                password=password,
                verified=True,
            )
            logger.info(f"Created user {user.id} <{user.email}>")

            if token_name is None:
                return None
            issued = await TokenService(session, settings.auth).create_token(
                user, token_name
            )
            return issued.plain_text_token
    finally:
        await engine.dispose()


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    configure_logging(get_settings().app.log_level)
    args = build_parser().parse_args(argv)

    try:
        token = asyncio.run(
            create_user(args.name, args.email, args.password, args.token)
        )
    except ValidationError as e:
        logger.error(e.message)
        return 1

    if token is not None:
        print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
