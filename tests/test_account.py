"""Tests for the chart of accounts service and commands."""

import pytest
from ledgerbook.cli.main import cli
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import NotFoundError, ValidationError
from ledgerbook.utils.account_resolver import resolve_account


def test_create_account(account_service):
    account_id = account_service.create_account(code=" 1101 ", name="Cash on Hand", account_type="asset")

    account = account_service.get_account(account_id)
    assert account.code == "1101"
    assert account.type == AccountType.ASSET


def test_create_account_duplicate_code(account_service):
    account_service.create_account(code="1101", name="Cash on Hand", account_type="asset")

    with pytest.raises(ValidationError, match="already exists"):
        account_service.create_account(code="1101", name="Cash", account_type="asset")


@pytest.mark.parametrize(
    "code, name, account_type",
    [("", "Cash", "asset"), ("1101", "  ", "asset"), ("1101", "Cash", "income")],
)
def test_create_account_validation(account_service, code, name, account_type):
    with pytest.raises(ValidationError):
        account_service.create_account(code=code, name=name, account_type=account_type)


def test_require_account(account_service, accounts):
    assert account_service.require_account(accounts["1101"].id) == accounts["1101"]
    with pytest.raises(NotFoundError, match="Account 999 not found"):
        account_service.require_account(999)


def test_get_accounts_map(account_service, accounts):
    ids = [accounts["1101"].id, accounts["4101"].id, accounts["1101"].id]

    result = account_service.get_accounts_map(ids)

    assert result == {accounts["1101"].id: accounts["1101"], accounts["4101"].id: accounts["4101"]}
    assert account_service.get_accounts_map([]) == {}


def test_resolve_account_prefers_code(account_service, accounts):
    assert resolve_account(account_service, "4101") == accounts["4101"].id
    assert resolve_account(account_service, str(accounts["5301"].id)) == accounts["5301"].id
    assert resolve_account(account_service, accounts["1102"].id) == accounts["1102"].id


def test_resolve_account_unknown(account_service, accounts):
    with pytest.raises(ValueError, match="not found"):
        resolve_account(account_service, "9999")
    with pytest.raises(ValueError, match="not found"):
        resolve_account(account_service, "cash")


def test_account_create_command(cli_runner, temp_db):
    """Test creating an account from the command line."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "1101", "Cash on Hand", "--type", "asset"]
    )

    assert result.exit_code == 0
    assert "Created account 1101 'Cash on Hand'" in result.output
    assert "ID:" in result.output


def test_account_list_empty(cli_runner, temp_db):
    """Test listing accounts when none exist."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_with_data(cli_runner, temp_db, accounts):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "Cash on Hand" in result.output
    assert "revenue" in result.output
    # Ordered by code
    assert result.output.index("1101") < result.output.index("5301")


def test_account_create_duplicate(cli_runner, temp_db, accounts):
    """Test creating duplicate account code fails."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "1101", "Cash", "--type", "asset"]
    )

    assert result.exit_code == 1
    assert "Error: Account with code '1101' already exists" in result.output
