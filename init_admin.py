"""
Initialise the default Admin account.
Creates an administrator for first login when none exists yet.
"""
import asyncio

from ezelectronics.infrastructure.database.session import get_session, init_db
from ezelectronics.modules.accounts import AccountCreateInput, AccountService, Role
from ezelectronics.infrastructure.database.repositories import SqlAccountRepository


async def create_default_admin():
    """Create the default Admin account."""
    await init_db()

    async for db in get_session():
        repository = SqlAccountRepository(db)
        if await repository.list_accounts_by_role(Role.ADMIN):
            print("An Admin account already exists, nothing to do")
            return

        service = AccountService(repository)
        await service.create_account(
            AccountCreateInput(
                username="admin",
                name="Admin",
                surname="EZElectronics",
                password="admin123",
                role=Role.ADMIN,
            )
        )
        await db.commit()

        print("=" * 50)
        print("Default Admin account created")
        print("=" * 50)
        print("username: admin")
        print("password: admin123")
        print("=" * 50)
        print("Change this password after the first login!")
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin())
