"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Account, Role, UNSET


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence.

    Lookups, updates and deletes raise ``AccountNotFoundError`` rather than
    returning ``None`` when the username is unknown.
    """

    async def create_account(
        self,
        *,
        username: str,
        name: str,
        surname: str,
        password: str,
        role: Role,
    ) -> bool:
        ...

    async def list_accounts(self) -> Sequence[Account]:
        ...

    async def list_accounts_by_role(self, role: Role) -> Sequence[Account]:
        ...

    async def get_by_username(self, username: str) -> Account:
        ...

    async def update_account(
        self,
        username: str,
        *,
        name: str | object = UNSET,
        surname: str | object = UNSET,
        address: str | None | object = UNSET,
        birthdate: str | None | object = UNSET,
    ) -> Account:
        ...

    async def delete_account(self, username: str) -> bool:
        ...

    async def delete_all_except_admins(self) -> bool:
        ...

    async def verify_credentials(self, username: str, password: str) -> Account | None:
        ...
