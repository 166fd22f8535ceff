"""Account domain specific exceptions."""


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when attempting to create an account with duplicate username."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""


class UnauthorizedAccessError(AccountError):
    """Raised when a non-admin caller reads or edits another account."""


class CallerNotAdminError(AccountError):
    """Raised when a non-admin caller tries to delete another account."""


class AdminEditForbiddenError(AccountError):
    """Raised when an admin tries to edit or delete an admin account."""


class InvalidDateError(AccountError):
    """Raised when a date is malformed or lies after today."""


class InvalidRoleError(AccountError):
    """Raised when a role is outside the recognized set."""


class AccountStorageError(AccountError):
    """Raised for storage faults that have no more specific meaning."""
