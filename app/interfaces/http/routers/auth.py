"""Public authentication endpoints: registration and login."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.container import get_settings_dependency
from app.core.errors import AuthenticationError
from app.core.security import create_access_token
from app.interfaces.http.deps import get_account_service, get_db_session
from app.modules.accounts import Account, AccountCreateInput, AccountService
from app.schemas import AccountCreate, AccountSummary, AuthResponse, LoginRequest

router = APIRouter()


def _auth_response(settings: Settings, account: Account) -> AuthResponse:
    token = create_access_token(settings, account.id, account.username)
    return AuthResponse(token=token, user=AccountSummary.model_validate(account))


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account and receive a token",
)
async def register(
    payload: AccountCreate,
    account_service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings_dependency),
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    account = await account_service.register(
        AccountCreateInput(
            username=payload.username,
            password=payload.password,
            email=str(payload.email) if payload.email else None,
        )
    )
    await db.commit()
    return _auth_response(settings, account)


@router.post("/login", response_model=AuthResponse, summary="Exchange credentials for a token")
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthResponse:
    account = await account_service.authenticate(payload.username, payload.password)
    if account is None:
        raise AuthenticationError("Invalid credentials", error="Invalid credentials")
    return _auth_response(settings, account)
