"""Translation of account domain errors into HTTP responses."""

from fastapi import HTTPException, status

from ezelectronics.modules.accounts import (
    AccountAlreadyExistsError,
    AccountError,
    AccountNotFoundError,
    AccountStorageError,
    AdminEditForbiddenError,
    CallerNotAdminError,
    InvalidDateError,
    InvalidRoleError,
    UnauthorizedAccessError,
)

_STATUS_BY_ERROR: dict[type[AccountError], tuple[int, str]] = {
    AccountAlreadyExistsError: (status.HTTP_409_CONFLICT, "username already exists"),
    AccountNotFoundError: (status.HTTP_404_NOT_FOUND, "user not found"),
    UnauthorizedAccessError: (status.HTTP_401_UNAUTHORIZED, "not allowed to access this user"),
    CallerNotAdminError: (status.HTTP_401_UNAUTHORIZED, "only admins may delete other users"),
    AdminEditForbiddenError: (status.HTTP_401_UNAUTHORIZED, "admins cannot modify other admins"),
    InvalidDateError: (status.HTTP_400_BAD_REQUEST, "birthdate must be a past YYYY-MM-DD date"),
    InvalidRoleError: (status.HTTP_400_BAD_REQUEST, "role must be Customer, Manager or Admin"),
    AccountStorageError: (status.HTTP_503_SERVICE_UNAVAILABLE, "storage unavailable"),
}


def to_http_error(exc: AccountError) -> HTTPException:
    for error_type in type(exc).__mro__:
        if error_type in _STATUS_BY_ERROR:
            status_code, detail = _STATUS_BY_ERROR[error_type]
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


__all__ = ["to_http_error"]
