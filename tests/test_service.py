"""Tests for :class:`ezelectronics.modules.accounts.AccountService`."""

from unittest import IsolatedAsyncioTestCase, mock

from ezelectronics.infrastructure.database.repositories import SqlAccountRepository
from ezelectronics.modules.accounts import (
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountNotFoundError,
    AccountService,
    AccountUpdateInput,
    AdminEditForbiddenError,
    CallerNotAdminError,
    InvalidDateError,
    InvalidRoleError,
    Role,
    UnauthorizedAccessError,
)
from ezelectronics.modules.accounts import service as service_module

from .util import account


class ServiceTestCase(IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.repository = mock.AsyncMock(spec=SqlAccountRepository)
        self.service = AccountService(self.repository)
        self.customer = account("customer")
        self.customer2 = account("customer2")
        self.admin = account("admin", Role.ADMIN)
        self.admin2 = account("admin2", Role.ADMIN)


class TestCreateAccount(ServiceTestCase):
    """Registration needs no caller and only checks the role."""

    async def test_create_passes_through(self) -> None:
        """A valid payload is handed to the repository with a parsed role."""
        self.repository.create_account.return_value = True
        payload = AccountCreateInput("test", "test", "test", "test", "Manager")

        self.assertTrue(await self.service.create_account(payload))
        self.repository.create_account.assert_awaited_once_with(
            username="test", name="test", surname="test", password="test", role=Role.MANAGER
        )

    async def test_create_duplicate(self) -> None:
        """A duplicate username surfaces the repository error unchanged."""
        self.repository.create_account.side_effect = AccountAlreadyExistsError("test")
        payload = AccountCreateInput("test", "test", "test", "test", Role.CUSTOMER)

        with self.assertRaises(AccountAlreadyExistsError):
            await self.service.create_account(payload)
        self.repository.create_account.assert_awaited_once()

    async def test_create_unknown_role(self) -> None:
        """An unknown role is rejected before storage is touched."""
        payload = AccountCreateInput("test", "test", "test", "test", "Superuser")

        with self.assertRaises(InvalidRoleError):
            await self.service.create_account(payload)
        self.repository.create_account.assert_not_awaited()


class TestListAccounts(ServiceTestCase):
    async def test_admin_lists_everyone(self) -> None:
        users = [self.customer, self.admin]
        self.repository.list_accounts.return_value = users

        self.assertEqual(await self.service.list_accounts(self.admin), users)
        self.repository.list_accounts.assert_awaited_once_with()

    async def test_non_admin_cannot_list(self) -> None:
        for caller in (self.customer, account("manager", Role.MANAGER)):
            with self.assertRaises(UnauthorizedAccessError):
                await self.service.list_accounts(caller)
        self.repository.list_accounts.assert_not_awaited()

    async def test_admin_lists_by_role(self) -> None:
        """The role string is normalized before the lookup."""
        self.repository.list_accounts_by_role.return_value = []

        await self.service.list_accounts_by_role(self.admin, "Manager")
        self.repository.list_accounts_by_role.assert_awaited_once_with(Role.MANAGER)

    async def test_list_by_unknown_role(self) -> None:
        with self.assertRaises(InvalidRoleError):
            await self.service.list_accounts_by_role(self.admin, "manager")
        self.repository.list_accounts_by_role.assert_not_awaited()

    async def test_non_admin_cannot_list_by_role(self) -> None:
        """Authorization is decided before the role is even looked at."""
        with self.assertRaises(UnauthorizedAccessError):
            await self.service.list_accounts_by_role(self.customer, "nonsense")
        self.repository.list_accounts_by_role.assert_not_awaited()


class TestGetByUsername(ServiceTestCase):
    async def test_self_lookup(self) -> None:
        self.repository.get_by_username.return_value = self.customer

        result = await self.service.get_by_username(self.customer, "customer")
        self.assertIs(result, self.customer)
        self.repository.get_by_username.assert_awaited_once_with("customer")

    async def test_admin_looks_up_anyone(self) -> None:
        self.repository.get_by_username.return_value = self.customer

        result = await self.service.get_by_username(self.admin, "customer")
        self.assertIs(result, self.customer)
        self.repository.get_by_username.assert_awaited_once_with("customer")

    async def test_admin_lookup_missing(self) -> None:
        """A missing account is reported after exactly one lookup."""
        self.repository.get_by_username.side_effect = AccountNotFoundError("doesNotExist")

        with self.assertRaises(AccountNotFoundError):
            await self.service.get_by_username(self.admin, "doesNotExist")
        self.assertEqual(self.repository.get_by_username.await_count, 1)

    async def test_non_admin_other_lookup(self) -> None:
        """Reading someone else's record is refused with no lookup at all."""
        with self.assertLogs(service_module.logger, level="WARNING"):
            with self.assertRaises(UnauthorizedAccessError):
                await self.service.get_by_username(self.customer, "customer2")
        self.assertEqual(self.repository.get_by_username.await_count, 0)


class TestUpdateInfo(ServiceTestCase):
    def payload(self, birthdate="1980-01-01") -> AccountUpdateInput:
        return AccountUpdateInput(
            name="newName",
            surname="newSurname",
            address="Torino, Via Madama Cristina 27",
            birthdate=birthdate,
        )

    async def test_non_admin_updates_self(self) -> None:
        """The self-only path updates directly without a lookup."""
        updated = account(
            "MarioRossi",
            name="newName",
            surname="newSurname",
            address="Torino, Via X 27",
            birthdate="1980-01-01",
        )
        self.repository.update_account.return_value = updated
        caller = account("MarioRossi")
        payload = AccountUpdateInput("newName", "newSurname", "Torino, Via X 27", "1980-01-01")

        result = await self.service.update_info(caller, "MarioRossi", payload)

        self.assertIs(result, updated)
        self.repository.get_by_username.assert_not_awaited()
        self.repository.update_account.assert_awaited_once_with(
            "MarioRossi",
            name="newName",
            surname="newSurname",
            address="Torino, Via X 27",
            birthdate="1980-01-01",
        )

    async def test_admin_updates_customer(self) -> None:
        self.repository.get_by_username.return_value = self.customer
        self.repository.update_account.return_value = self.customer

        await self.service.update_info(self.admin, "customer", self.payload())

        self.repository.get_by_username.assert_awaited_once_with("customer")
        self.repository.update_account.assert_awaited_once()

    async def test_admin_updates_self(self) -> None:
        self.repository.update_account.return_value = self.admin

        await self.service.update_info(self.admin, "admin", self.payload())

        self.repository.get_by_username.assert_not_awaited()
        self.repository.update_account.assert_awaited_once()

    async def test_admin_updates_missing_user(self) -> None:
        self.repository.get_by_username.side_effect = AccountNotFoundError("customer")

        with self.assertRaises(AccountNotFoundError):
            await self.service.update_info(self.admin, "customer", self.payload())
        self.repository.get_by_username.assert_awaited_once_with("customer")
        self.repository.update_account.assert_not_awaited()

    async def test_admin_cannot_update_admin(self) -> None:
        self.repository.get_by_username.return_value = self.admin2

        with self.assertRaises(AdminEditForbiddenError):
            await self.service.update_info(self.admin, "admin2", self.payload())
        self.repository.update_account.assert_not_awaited()

    async def test_non_admin_cannot_update_other(self) -> None:
        with self.assertRaises(UnauthorizedAccessError):
            await self.service.update_info(self.customer, "customer2", self.payload())
        self.repository.get_by_username.assert_not_awaited()
        self.repository.update_account.assert_not_awaited()

    async def test_future_birthdate_always_rejected(self) -> None:
        """The date is checked first, whoever calls and whoever is targeted."""
        cases = [
            (self.customer, "customer"),
            (self.customer, "customer2"),
            (self.admin, "admin2"),
            (self.admin, "doesNotExist"),
        ]
        for caller, target in cases:
            with self.subTest(caller=caller.username, target=target):
                with self.assertRaises(InvalidDateError):
                    await self.service.update_info(caller, target, self.payload("2099-01-01"))
        self.repository.get_by_username.assert_not_awaited()
        self.repository.update_account.assert_not_awaited()

    async def test_partial_update_forwards_only_supplied_fields(self) -> None:
        """Omitted fields are not sent; an explicit ``None`` clears a field."""
        self.repository.update_account.return_value = self.customer

        await self.service.update_info(self.customer, "customer", AccountUpdateInput(address=None))

        self.repository.update_account.assert_awaited_once_with("customer", address=None)


class TestDeleteAccount(ServiceTestCase):
    async def test_admin_deletes_customer(self) -> None:
        self.repository.get_by_username.return_value = self.customer
        self.repository.delete_account.return_value = True

        self.assertTrue(await self.service.delete_account(self.admin, "customer"))
        self.repository.get_by_username.assert_awaited_once_with("customer")
        self.repository.delete_account.assert_awaited_once_with("customer")

    async def test_non_admin_deletes_self(self) -> None:
        self.repository.delete_account.return_value = True

        self.assertTrue(await self.service.delete_account(self.customer, "customer"))
        self.repository.get_by_username.assert_not_awaited()
        self.repository.delete_account.assert_awaited_once_with("customer")

    async def test_admin_deletes_missing_user(self) -> None:
        self.repository.get_by_username.side_effect = AccountNotFoundError("customer")

        with self.assertRaises(AccountNotFoundError):
            await self.service.delete_account(self.admin, "customer")
        self.repository.get_by_username.assert_awaited_once_with("customer")
        self.repository.delete_account.assert_not_awaited()

    async def test_non_admin_deletes_other(self) -> None:
        with self.assertRaises(CallerNotAdminError):
            await self.service.delete_account(self.customer, "customer2")
        self.assertEqual(self.repository.get_by_username.await_count, 0)
        self.assertEqual(self.repository.delete_account.await_count, 0)

    async def test_admin_cannot_delete_admin(self) -> None:
        self.repository.get_by_username.return_value = self.admin2

        with self.assertRaises(AdminEditForbiddenError):
            await self.service.delete_account(self.admin, "admin2")
        self.assertEqual(self.repository.get_by_username.await_count, 1)
        self.assertEqual(self.repository.delete_account.await_count, 0)

    async def test_admin_cannot_delete_self(self) -> None:
        """The caller's own record is an admin record too."""
        self.repository.get_by_username.return_value = self.admin

        with self.assertRaises(AdminEditForbiddenError):
            await self.service.delete_account(self.admin, "admin")
        self.repository.delete_account.assert_not_awaited()

    async def test_delete_all(self) -> None:
        self.repository.delete_all_except_admins.return_value = True

        self.assertTrue(await self.service.delete_all())
        self.repository.delete_all_except_admins.assert_awaited_once_with()


class TestAuthenticate(ServiceTestCase):
    async def test_delegates_to_repository(self) -> None:
        self.repository.verify_credentials.return_value = self.customer

        self.assertIs(await self.service.authenticate("customer", "secret"), self.customer)
        self.repository.verify_credentials.assert_awaited_once_with("customer", "secret")
