"""Domain services for account management.

:class:`AccountService` decides who may see or change which account and only
then talks to the repository. Every rejection happens before the first
repository call that the rejected operation would have made, so the order of
the checks below matters:

* ``update_info`` validates the birthdate before anything else;
* ``get_by_username`` and ``delete_account`` check self-vs-admin before any
  lookup;
* the target is looked up before the admin-on-admin check;
* the admin-on-admin check always precedes the mutation.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import (
    AdminEditForbiddenError,
    CallerNotAdminError,
    InvalidDateError,
    UnauthorizedAccessError,
)
from .models import Account, AccountCreateInput, AccountUpdateInput, Role
from .repository import AccountRepository

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def validate_date(value: str) -> str:
    """Return ``value`` normalized to ``YYYY-MM-DD``.

    Raises :class:`InvalidDateError` when ``value`` does not parse or names a
    day strictly after today.
    """
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError) as exc:
        raise InvalidDateError(f"not a YYYY-MM-DD date: {value!r}") from exc
    if parsed > date.today():
        raise InvalidDateError(f"date is in the future: {value}")
    return parsed.isoformat()


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        # deferred, the SQL repository imports this package
        from ezelectronics.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(SqlAccountRepository(session))

    validate_date = staticmethod(validate_date)

    async def create_account(self, payload: AccountCreateInput) -> bool:
        role = Role.parse(payload.role)
        return await self._repository.create_account(
            username=payload.username,
            name=payload.name,
            surname=payload.surname,
            password=payload.password,
            role=role,
        )

    async def authenticate(self, username: str, password: str) -> Account | None:
        return await self._repository.verify_credentials(username, password)

    async def list_accounts(self, caller: Account) -> Sequence[Account]:
        self._require_admin(caller)
        return await self._repository.list_accounts()

    async def list_accounts_by_role(self, caller: Account, role: Role | str) -> Sequence[Account]:
        self._require_admin(caller)
        return await self._repository.list_accounts_by_role(Role.parse(role))

    async def get_by_username(self, caller: Account, username: str) -> Account:
        if not caller.is_admin() and caller.username != username:
            logger.warning("%s denied read access to account %s", caller.username, username)
            raise UnauthorizedAccessError(username)
        return await self._repository.get_by_username(username)

    async def update_info(self, caller: Account, username: str, payload: AccountUpdateInput) -> Account:
        fields = payload.supplied()
        if fields.get("birthdate") is not None:
            fields["birthdate"] = validate_date(fields["birthdate"])

        if not caller.is_admin():
            if caller.username != username:
                logger.warning("%s denied update of account %s", caller.username, username)
                raise UnauthorizedAccessError(username)
        elif caller.username != username:
            target = await self._repository.get_by_username(username)
            if target.is_admin():
                logger.warning("admin %s refused update of admin %s", caller.username, username)
                raise AdminEditForbiddenError(username)

        return await self._repository.update_account(username, **fields)

    async def delete_account(self, caller: Account, username: str) -> bool:
        if not caller.is_admin():
            if caller.username != username:
                logger.warning("%s denied deletion of account %s", caller.username, username)
                raise CallerNotAdminError(username)
            return await self._repository.delete_account(username)

        target = await self._repository.get_by_username(username)
        if target.is_admin():
            logger.warning("admin %s refused deletion of admin %s", caller.username, username)
            raise AdminEditForbiddenError(username)
        return await self._repository.delete_account(username)

    async def delete_all(self) -> bool:
        return await self._repository.delete_all_except_admins()

    @staticmethod
    def _require_admin(caller: Account) -> None:
        if not caller.is_admin():
            logger.warning("%s denied admin-only account listing", caller.username)
            raise UnauthorizedAccessError(caller.username)
