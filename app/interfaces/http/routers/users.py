"""Account self-service endpoints."""
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import Identity, get_current_identity
from app.interfaces.http.deps import get_account_service, get_db_session
from app.modules.accounts import UNSET, AccountService, AccountUpdateInput
from app.schemas import AccountResponse, AccountUpdate, AccountUpdateResponse, MessageResponse

router = APIRouter(dependencies=[Depends(get_current_identity)])


@router.get("/me", response_model=AccountResponse, summary="Current account profile")
async def current_account(
    identity: Identity = Depends(get_current_identity),
    account_service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    account = await account_service.get_profile(identity.account_id)
    return AccountResponse.model_validate(account)


@router.put("/{account_id}", response_model=AccountUpdateResponse, summary="Update own account")
async def update_account(
    payload: AccountUpdate,
    account_id: str = Path(..., min_length=1),
    identity: Identity = Depends(get_current_identity),
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountUpdateResponse:
    fields = payload.model_dump(exclude_unset=True)
    account = await account_service.update_account(
        identity.account_id,
        account_id,
        AccountUpdateInput(
            username=fields.get("username", UNSET),
            email=str(fields["email"]) if fields.get("email") else UNSET,
            password=fields.get("password", UNSET),
        ),
    )
    await db.commit()
    return AccountUpdateResponse.model_validate(account)


@router.delete("/{account_id}", response_model=MessageResponse, summary="Delete own account and its audio")
async def delete_account(
    account_id: str = Path(..., min_length=1),
    identity: Identity = Depends(get_current_identity),
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await account_service.delete_account(identity.account_id, account_id)
    await db.commit()
    return MessageResponse(message="User deleted successfully")
