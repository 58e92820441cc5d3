#!/usr/bin/env python3
"""Create an admin account, or reset the password of an existing one."""

import argparse
import asyncio
import getpass
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from manual_portal.config import load_settings
from manual_portal.database import close_pool, get_connection, init_db, init_pool
from manual_portal.services.auth import hash_password


async def create_admin(email: str, password: str):
    settings = load_settings()
    await init_pool(settings.database_url)
    await init_db()

    password_hash = hash_password(password)

    try:
        async with get_connection() as conn:
            existing = await conn.fetchrow(
                "SELECT id FROM users WHERE email = $1",
                email
            )

            if existing:
                await conn.execute(
                    """
                    UPDATE users
                    SET password_hash = $1, role = 'admin', is_active = true, updated_at = NOW()
                    WHERE email = $2
                    """,
                    password_hash, email
                )
                print(f"Updated existing admin: {email}")
            else:
                await conn.execute(
                    """
                    INSERT INTO users (email, password_hash, role, is_active)
                    VALUES ($1, $2, 'admin', true)
                    """,
                    email, password_hash
                )
                print(f"Created admin: {email}")
    finally:
        await close_pool()


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email")
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if not password:
        parser.error("password must not be empty")

    asyncio.run(create_admin(args.email, password))


if __name__ == "__main__":
    main()
