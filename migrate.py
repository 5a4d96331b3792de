"""
Migration: Add follow-up columns to the submissions table.

Tables created before staff follow-up tracking existed lack these columns.
Run this ONCE against your existing database:
    python migrate.py

It is safe to run multiple times — uses IF NOT EXISTS logic.
"""

import asyncio
import os
from dotenv import load_dotenv

load_dotenv()  # reads your .env file

import asyncpg

FOLLOW_UP_COLUMNS = (
    ("status", "VARCHAR(32) NOT NULL DEFAULT 'New'"),
    ("assigned_to", "VARCHAR(255) DEFAULT NULL"),
    ("follow_up_date", "VARCHAR(50) DEFAULT NULL"),
    ("estimated_value", "VARCHAR(64) DEFAULT NULL"),
    ("notes", "TEXT DEFAULT NULL"),
)


async def migrate():
    conn = await asyncpg.connect(
        host=os.environ.get("DB_HOST", "localhost"),
        port=int(os.environ.get("DB_PORT", 5432)),
        database=os.environ.get("DB_NAME", "inquiry_intake"),
        user=os.environ.get("DB_USER", "postgres"),
        password=os.environ.get("DB_PASSWORD", "postgres"),
    )

    print("Connected to database. Running migration...")

    try:
        for column, ddl in FOLLOW_UP_COLUMNS:
            await conn.execute(f"ALTER TABLE submissions ADD COLUMN IF NOT EXISTS {column} {ddl};")
            print(f"  ✓ Column '{column}' ensured.")
    finally:
        await conn.close()

    print("\nMigration complete. You can now restart the intake service.")


if __name__ == "__main__":
    asyncio.run(migrate())
