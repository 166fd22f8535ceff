"""Login endpoints that turn credentials into a bearer token."""
from fastapi import APIRouter, Depends, HTTPException, status

from ezelectronics.core.security import create_access_token, get_current_account
from ezelectronics.interfaces.http.deps import get_account_service
from ezelectronics.interfaces.http.errors import to_http_error
from ezelectronics.modules.accounts import Account as AccountDomain
from ezelectronics.modules.accounts import AccountError, AccountService
from ezelectronics.schemas import AccountLoginResponse, AccountResponse, LoginRequest

router = APIRouter()


@router.post("", response_model=AccountLoginResponse, summary="Log in with username and password")
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
):
    try:
        account = await account_service.authenticate(payload.username, payload.password)
    except AccountError as exc:
        raise to_http_error(exc) from exc
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="incorrect username or password")

    access_token = create_access_token(account.username, account.role)
    return AccountLoginResponse(
        access_token=access_token,
        username=account.username,
        role=account.role,
    )


@router.get("/current", response_model=AccountResponse, summary="Return the logged-in user")
async def current_session(account: AccountDomain = Depends(get_current_account)):
    return account
