"""Utility for resolving account codes to IDs."""

from ledgerbook.domain.account import AccountService


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve a chart of accounts code or account ID to an account ID.

    A string is first matched against account codes (e.g. "1101"); only
    when no code matches is it treated as a numeric ID.

    Args:
        account_service: AccountService instance
        account: Account code (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found
    """
    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise ValueError(f"Account ID {account} not found")
        return account

    by_code = account_service.get_account_by_code(account.strip())
    if by_code is not None:
        return by_code.id

    try:
        account_id = int(account)
    except (ValueError, TypeError):
        raise ValueError(f"Account '{account}' not found")

    if account_service.get_account(account_id) is None:
        raise ValueError(f"Account '{account}' not found")
    return account_id
