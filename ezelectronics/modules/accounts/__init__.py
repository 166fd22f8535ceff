"""Account domain services and models."""

from .models import Account, AccountCreateInput, AccountUpdateInput, Role, UNSET
from .service import AccountService, validate_date
from .exceptions import (
    AccountError,
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AccountStorageError,
    AdminEditForbiddenError,
    CallerNotAdminError,
    InvalidDateError,
    InvalidRoleError,
    UnauthorizedAccessError,
)

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountUpdateInput",
    "AccountService",
    "Role",
    "UNSET",
    "validate_date",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "AccountStorageError",
    "AdminEditForbiddenError",
    "CallerNotAdminError",
    "InvalidDateError",
    "InvalidRoleError",
    "UnauthorizedAccessError",
]
