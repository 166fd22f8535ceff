"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import InvalidRoleError


class Role(str, Enum):
    CUSTOMER = "Customer"
    MANAGER = "Manager"
    ADMIN = "Admin"

    @classmethod
    def parse(cls, value: "Role | str") -> "Role":
        """Return the matching role or raise :class:`InvalidRoleError`."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidRoleError(f"unknown role: {value!r}") from exc


@dataclass(slots=True)
class Account:
    """A user identity as seen outside the persistence layer.

    The stored credential is deliberately not part of this type.
    """

    username: str
    name: str
    surname: str
    role: Role
    address: Optional[str] = None
    birthdate: Optional[str] = None

    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    name: str
    surname: str
    password: str
    role: Role | str = Role.CUSTOMER


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    name: str | object = UNSET
    surname: str | object = UNSET
    address: Optional[str] | object = UNSET
    birthdate: Optional[str] | object = UNSET

    def supplied(self) -> dict[str, object]:
        """Return only the fields given in this call, keyed by column name."""
        values = {
            "name": self.name,
            "surname": self.surname,
            "address": self.address,
            "birthdate": self.birthdate,
        }
        return {key: value for key, value in values.items() if value is not UNSET}
