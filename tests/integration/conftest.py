"""Fixtures for integration tests backed by a file-based SQLite database.

A file (not :memory:) is used so every pooled connection sees the same
database and SQLite's write lock serializes concurrent transactions.
"""

import pytest_asyncio

from otp_guard.infrastructure.persistence.database import Database


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'otp.db'}")
    await db.create_all()
    yield db
    await db.close()
