#!/usr/bin/env python3
"""
Create a farm organization together with its first ADMIN user.

Usage:
  python scripts/create_organization.py --name "Green Valley" \
      --username admin --email admin@example.com [--password SECRET]

When --password is omitted a random one is generated and printed once.
"""

import argparse
import asyncio
import secrets
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import AppError
from src.application.use_cases.organizations import create_organization
from src.config.settings import get_settings
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    password = args.password or secrets.token_urlsafe(12)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            result = await create_organization.execute(
                uow=uow,
                payload=create_organization.CreateOrganizationInput(
                    name=args.name,
                    description=args.description,
                    admin_username=args.username,
                    admin_email=args.email,
                    admin_password=password,
                ),
                password_hasher=PasswordHasher(),
            )
    except AppError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    finally:
        await engine.dispose()

    print(f"Organization: {result.organization.name} ({result.organization.id})")
    print(f"Admin user:   {result.admin.username} ({result.admin.id})")
    if not args.password:
        print(f"Password:     {password}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Create an organization and its admin user")
    parser.add_argument("--name", required=True, help="Organization name")
    parser.add_argument("--description", default=None)
    parser.add_argument("--username", required=True, help="Admin username")
    parser.add_argument("--email", required=True, help="Admin email")
    parser.add_argument("--password", default=None, help="Admin password (generated if omitted)")
    sys.exit(asyncio.run(run(parser.parse_args())))


if __name__ == "__main__":
    main()
