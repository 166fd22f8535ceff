"""Pydantic schemas used across the project."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ezelectronics.modules.accounts.models import Role


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class TokenData(BaseModel):
    username: str
    role: Role


class AccountLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: str
    role: Role


class AccountCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    # validated by the service so an unknown role maps to 400, not 422
    role: str = Field(..., min_length=1)


class AccountResponse(BaseModel):
    username: str
    name: str
    surname: str
    role: Role
    address: Optional[str] = None
    birthdate: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AccountUpdate(BaseModel):
    """Partial update; fields left out of the body are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    surname: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = None
    birthdate: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True
    message: str = "ok"
    data: Optional[Any] = None
