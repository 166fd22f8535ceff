"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ezelectronics.core.config import get_settings
from ezelectronics.core.crypto import generate_salt, hash_password, verify_password
from ezelectronics.infrastructure.database.models import User as UserModel
from ezelectronics.modules.accounts.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountStorageError,
)
from ezelectronics.modules.accounts.models import Account, Role, UNSET
from ezelectronics.modules.accounts.repository import AccountRepository

logger = logging.getLogger(__name__)


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession, *, password_rounds: int | None = None) -> None:
        self._session = session
        self._password_rounds = password_rounds or get_settings().password_rounds

    async def create_account(
        self,
        *,
        username: str,
        name: str,
        surname: str,
        password: str,
        role: Role,
    ) -> bool:
        salt = generate_salt(self._password_rounds)
        # bcrypt is deliberately slow; keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, password, salt)
        stmt = insert(UserModel).values(
            username=username,
            name=name,
            surname=surname,
            role=role.value,
            password=password_hash,
            salt=salt,
        )
        try:
            # the savepoint undoes only this insert, the caller owns the transaction
            async with self._session.begin_nested():
                await self._session.execute(stmt)
        except IntegrityError as exc:
            raise AccountAlreadyExistsError(username) from exc
        except SQLAlchemyError as exc:
            logger.error("creating account %s failed: %s", username, exc)
            raise AccountStorageError(str(exc)) from exc

        logger.info("account %s created with role %s", username, role.value)
        return True

    async def list_accounts(self) -> Sequence[Account]:
        result = await self._execute(select(UserModel))
        return [self._to_domain(model) for model in result.scalars().all()]

    async def list_accounts_by_role(self, role: Role) -> Sequence[Account]:
        result = await self._execute(select(UserModel).where(UserModel.role == role.value))
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get_by_username(self, username: str) -> Account:
        model = await self._get_model(username)
        if model is None:
            raise AccountNotFoundError(username)
        return self._to_domain(model)

    async def update_account(
        self,
        username: str,
        *,
        name: str | object = UNSET,
        surname: str | object = UNSET,
        address: str | None | object = UNSET,
        birthdate: str | None | object = UNSET,
    ) -> Account:
        values = {
            key: value
            for key, value in (
                ("name", name),
                ("surname", surname),
                ("address", address),
                ("birthdate", birthdate),
            )
            if value is not UNSET
        }
        if values:
            stmt = update(UserModel).where(UserModel.username == username).values(**values)
            result = await self._execute(stmt)
            if result.rowcount == 0:
                raise AccountNotFoundError(username)
        return await self.get_by_username(username)

    async def delete_account(self, username: str) -> bool:
        result = await self._execute(delete(UserModel).where(UserModel.username == username))
        if result.rowcount == 0:
            raise AccountNotFoundError(username)
        logger.info("account %s deleted", username)
        return True

    async def delete_all_except_admins(self) -> bool:
        result = await self._execute(delete(UserModel).where(UserModel.role != Role.ADMIN.value))
        logger.info("bulk delete removed %s non-admin accounts", result.rowcount)
        return True

    async def verify_credentials(self, username: str, password: str) -> Account | None:
        model = await self._get_model(username)
        if model is None or model.password is None:
            return None
        matches = await asyncio.to_thread(verify_password, password, model.password)
        if not matches:
            return None
        return self._to_domain(model)

    async def _get_model(self, username: str) -> UserModel | None:
        result = await self._execute(select(UserModel).where(UserModel.username == username))
        return result.scalar_one_or_none()

    async def _execute(self, stmt: Any) -> Any:
        try:
            return await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("account storage failure: %s", exc)
            raise AccountStorageError(str(exc)) from exc

    @staticmethod
    def _to_domain(model: UserModel) -> Account:
        return Account(
            username=model.username,
            name=model.name,
            surname=model.surname,
            role=Role.parse(model.role),
            address=model.address,
            birthdate=model.birthdate,
        )
