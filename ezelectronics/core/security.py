"""JWT helpers and the caller-identity dependencies."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from ezelectronics.core.config import get_settings
from ezelectronics.infrastructure.database.repositories.account_repository import SqlAccountRepository
from ezelectronics.interfaces.http.deps.database import get_db_session
from ezelectronics.modules.accounts import Account as AccountDomain
from ezelectronics.modules.accounts import AccountNotFoundError, InvalidRoleError, Role
from ezelectronics.schemas import TokenData

settings = get_settings()
security = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str = "could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(username: str, role: Role, expires_delta: Optional[timedelta] = None) -> str:
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": username,
        "role": role.value,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise _unauthenticated() from exc

    username = payload.get("sub")
    role = payload.get("role")
    if not all([username, role]):
        raise _unauthenticated()
    try:
        return TokenData(username=username, role=Role.parse(role))
    except InvalidRoleError as exc:
        raise _unauthenticated() from exc


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db_session),
) -> AccountDomain:
    if credentials is None:
        raise _unauthenticated("not authenticated")
    token_data = decode_access_token(credentials.credentials)
    try:
        return await SqlAccountRepository(db).get_by_username(token_data.username)
    except AccountNotFoundError as exc:
        raise _unauthenticated("account no longer exists") from exc


async def get_current_admin(account: AccountDomain = Depends(get_current_account)) -> AccountDomain:
    if not account.is_admin():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="admin role required")
    return account
