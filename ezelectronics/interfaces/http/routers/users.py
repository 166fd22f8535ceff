"""User account endpoints."""
from typing import List

from fastapi import APIRouter, Depends

from ezelectronics.core.security import get_current_account, get_current_admin
from ezelectronics.interfaces.http.deps import get_account_service
from ezelectronics.interfaces.http.errors import to_http_error
from ezelectronics.modules.accounts import (
    Account as AccountDomain,
    AccountCreateInput,
    AccountError,
    AccountService,
    AccountUpdateInput,
)
from ezelectronics.schemas import AccountCreate, AccountResponse, AccountUpdate, SuccessResponse

router = APIRouter()


def _update_input(payload: AccountUpdate) -> AccountUpdateInput:
    supplied = {field: getattr(payload, field) for field in payload.model_fields_set}
    # name and surname are mandatory columns, an explicit null leaves them as they are
    for field in ("name", "surname"):
        if field in supplied and supplied[field] is None:
            del supplied[field]
    return AccountUpdateInput(**supplied)


@router.post("", response_model=SuccessResponse, summary="Register a new user")
async def create_user(
    payload: AccountCreate,
    service: AccountService = Depends(get_account_service),
):
    try:
        await service.create_account(
            AccountCreateInput(
                username=payload.username,
                name=payload.name,
                surname=payload.surname,
                password=payload.password,
                role=payload.role,
            )
        )
    except AccountError as exc:
        raise to_http_error(exc) from exc
    return SuccessResponse(message="user created")


@router.get("", response_model=List[AccountResponse], summary="List every user")
async def list_users(
    caller: AccountDomain = Depends(get_current_account),
    service: AccountService = Depends(get_account_service),
):
    try:
        return await service.list_accounts(caller)
    except AccountError as exc:
        raise to_http_error(exc) from exc


@router.get("/roles/{role}", response_model=List[AccountResponse], summary="List users with a role")
async def list_users_by_role(
    role: str,
    caller: AccountDomain = Depends(get_current_account),
    service: AccountService = Depends(get_account_service),
):
    try:
        return await service.list_accounts_by_role(caller, role)
    except AccountError as exc:
        raise to_http_error(exc) from exc


@router.get("/{username}", response_model=AccountResponse, summary="Get a single user")
async def get_user(
    username: str,
    caller: AccountDomain = Depends(get_current_account),
    service: AccountService = Depends(get_account_service),
):
    try:
        return await service.get_by_username(caller, username)
    except AccountError as exc:
        raise to_http_error(exc) from exc


@router.patch("/{username}", response_model=AccountResponse, summary="Update profile fields")
async def update_user(
    username: str,
    payload: AccountUpdate,
    caller: AccountDomain = Depends(get_current_account),
    service: AccountService = Depends(get_account_service),
):
    try:
        account = await service.update_info(caller, username, _update_input(payload))
    except AccountError as exc:
        raise to_http_error(exc) from exc
    return account


@router.delete("/{username}", response_model=SuccessResponse, summary="Delete a user")
async def delete_user(
    username: str,
    caller: AccountDomain = Depends(get_current_account),
    service: AccountService = Depends(get_account_service),
):
    try:
        await service.delete_account(caller, username)
    except AccountError as exc:
        raise to_http_error(exc) from exc
    return SuccessResponse(message="user deleted")


@router.delete("", response_model=SuccessResponse, summary="Delete every non-admin user")
async def delete_all_users(
    admin: AccountDomain = Depends(get_current_admin),
    service: AccountService = Depends(get_account_service),
):
    try:
        await service.delete_all()
    except AccountError as exc:
        raise to_http_error(exc) from exc
    return SuccessResponse(message="non-admin users deleted")
