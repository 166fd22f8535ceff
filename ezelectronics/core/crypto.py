"""Utilities for credential salting, hashing and verification."""

from __future__ import annotations

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    # bcrypt only reads 72 bytes; a 44-byte digest lets any password length through
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def generate_salt(rounds: int = 12) -> str:
    """Return a fresh bcrypt salt drawn from the OS random source."""
    return bcrypt.gensalt(rounds=rounds).decode("utf-8")


def hash_password(password: str, salt: str) -> str:
    """Derive the stored digest of ``password`` under ``salt``."""
    return bcrypt.hashpw(_prehash(password), salt.encode("utf-8")).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False


__all__ = ["generate_salt", "hash_password", "verify_password"]
