"""
Create Admin User

Registration only ever creates adopters. Run this script to create (or
promote) an admin account that can add schools.

Usage:
    python scripts/create_admin.py --email admin@example.org --name "Site Admin"
    # prompts for the password unless --password is given
"""

import argparse
import asyncio
import getpass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from campus_revival.core.config import settings
from campus_revival.core.security import hash_password
from campus_revival.modules.schools.models import School  # noqa: F401 - needed for relationship resolution
from campus_revival.modules.users.models import UserRole
from campus_revival.modules.users.repository import UserRepository

MIN_PASSWORD_LENGTH = 6


async def create_admin(email: str, password: str, name: str) -> None:
    """Create the admin user, or promote an existing account with that email."""
    engine = create_async_engine(settings.database_url, echo=False)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with session_maker() as db:
            existing_user = await UserRepository.get_by_email(db, email)

            if existing_user is not None:
                if existing_user.role == UserRole.ADMIN:
                    print(f"Admin already exists: {existing_user.email}")
                else:
                    existing_user.role = UserRole.ADMIN
                    await db.commit()
                    print(f"Promoted existing user to admin: {existing_user.email}")
                print(f"  ID: {existing_user.id}")
                return

            admin_user = await UserRepository.create(
                db,
                email=email,
                password_hash=hash_password(password),
                name=name,
                role=UserRole.ADMIN,
            )

            print("Admin created successfully!")
            print(f"  Email: {admin_user.email}")
            print(f"  Name: {admin_user.name}")
            print(f"  ID: {admin_user.id}")
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a Campus Revival admin user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--password", help="Admin password (prompted when omitted)")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        parser.error(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(args.name.strip()) < 2:
        parser.error("name must be at least 2 characters")

    asyncio.run(create_admin(args.email, password, args.name.strip()))


if __name__ == "__main__":
    main()
