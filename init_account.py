"""
Seed the demo account.

Creates ``demo`` / ``demo123`` so a fresh installation can be logged into
straight away. Safe to run repeatedly.
"""
import asyncio
import logging

from app.core.config import get_settings
from app.core.container import ApplicationContainer
from app.core.logging import setup_logging
from app.infrastructure.database.repositories import SqlAccountRepository
from app.modules.accounts import AccountCreateInput, AccountService

logger = logging.getLogger("init_account")

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo123"
DEMO_EMAIL = "demo@example.com"


async def create_demo_account() -> None:
    settings = get_settings()
    setup_logging(settings)
    container = ApplicationContainer.build(settings)
    await container.init_infrastructure()

    try:
        async with container.session() as db:
            service = AccountService(
                SqlAccountRepository(db),
                bcrypt_rounds=settings.security.bcrypt_rounds,
            )

            if await service.get_by_username(DEMO_USERNAME):
                logger.info("Demo account already exists")
            else:
                account = await service.register(
                    AccountCreateInput(
                        username=DEMO_USERNAME,
                        password=DEMO_PASSWORD,
                        email=DEMO_EMAIL,
                    )
                )
                logger.info("Demo account created: %s / %s (id %s)", DEMO_USERNAME, DEMO_PASSWORD, account.id)
    finally:
        await container.dispose()


if __name__ == "__main__":
    asyncio.run(create_demo_account())
