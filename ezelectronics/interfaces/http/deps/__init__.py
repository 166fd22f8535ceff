"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .account import get_account_repository, get_account_service

__all__ = [
    "get_db_session",
    "get_account_repository",
    "get_account_service",
]
