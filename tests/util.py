"""Testing helpers."""

import os
import tempfile
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ezelectronics.infrastructure.database.repositories import SqlAccountRepository
from ezelectronics.infrastructure.database.session import enable_sqlite_savepoints, init_db
from ezelectronics.modules.accounts import Account, Role

# cheapest bcrypt cost, the tests only care that hashing happens
TEST_ROUNDS = 4


@asynccontextmanager
async def temporary_db() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Provide a throwaway file-backed sqlite database for testing purposes."""
    with tempfile.TemporaryDirectory() as directory:
        url = f"sqlite+aiosqlite:///{os.path.join(directory, 'test.db')}"
        engine = create_async_engine(url)
        enable_sqlite_savepoints(engine)
        try:
            await init_db(engine)
            yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        finally:
            await engine.dispose()


async def seed(factory: async_sessionmaker[AsyncSession], *accounts: tuple) -> None:
    """Insert ``(username, name, surname, password, role)`` rows and commit."""
    async with factory() as session:
        repository = SqlAccountRepository(session, password_rounds=TEST_ROUNDS)
        for username, name, surname, password, role in accounts:
            await repository.create_account(
                username=username,
                name=name,
                surname=surname,
                password=password,
                role=role,
            )
        await session.commit()


def account(username: str, role: Role = Role.CUSTOMER, **kwargs) -> Account:
    kwargs.setdefault("name", f"Name{username}")
    kwargs.setdefault("surname", f"Surname{username}")
    return Account(username=username, role=role, **kwargs)
