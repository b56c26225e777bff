"""JSON-ready payloads for the general ledger operations.

Every function returns plain dicts and lists with camelCase keys, amounts in
integer minor units and dates as ISO strings, so the payloads can be handed
straight to ``json.dumps`` by whatever binding exposes the engine.
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional

from ledgerbook.domain.entities import (
    Account,
    BulkRecordResult,
    Category,
    Entry,
    GeneralLedgerView,
    LedgerMonth,
    LedgerRow,
    ResultStatus,
    TransferGroup,
    TransferResult,
    TransferValidation,
)
from ledgerbook.domain.errors import (
    DomainError,
    PersistenceError,
    persistence_failure,
)

UNEXPECTED_ERROR = "An unexpected error occurred"


def _iso(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def account_payload(account: Optional[Account]) -> Optional[dict[str, Any]]:
    if account is None:
        return None
    return {
        "id": account.id,
        "code": account.code,
        "name": account.name,
        "type": account.type.value,
    }


def category_payload(category: Optional[Category]) -> Optional[dict[str, Any]]:
    if category is None:
        return None
    return {
        "id": category.id,
        "name": category.name,
        "bookType": category.book_type.value,
    }


def entry_payload(entry: Entry) -> dict[str, Any]:
    """Serialize an entry, leaf or parent."""
    return {
        "id": entry.id,
        "userId": entry.user_id,
        "amount": entry.amount,
        "description": entry.description,
        "transactionDate": _iso(entry.transaction_date),
        "bookType": entry.book_type.value,
        "referenceNumber": entry.reference_number,
        "vatType": entry.vat_type.value,
        "vatAmount": entry.vat_amount,
        "debitAccountId": entry.debit_account_id,
        "creditAccountId": entry.credit_account_id,
        "categoryId": entry.category_id,
        "status": entry.status.value,
        "createdAt": _iso(entry.created_at),
        "recordedAt": _iso(entry.recorded_at),
        "transferredToGlAt": _iso(entry.transferred_to_gl_at),
        "glParentId": entry.gl_parent_id,
        "glPostingMonth": entry.gl_posting_month,
    }


def transfer_response(result: TransferResult) -> dict[str, Any]:
    summary = result.summary
    return {
        "status": result.status.value,
        "parentEntries": [entry_payload(parent) for parent in result.parent_entries],
        "totalEntries": result.total_entries,
        "totalGroups": result.total_groups,
        "summary": {
            "targetMonth": summary.target_month,
            "totalAmount": summary.total_amount,
            "accountsAffected": [
                {
                    "accountId": activity.account_id,
                    "debitCount": activity.debit_count,
                    "creditCount": activity.credit_count,
                    "totalDebitAmount": activity.total_debit_amount,
                    "totalCreditAmount": activity.total_credit_amount,
                }
                for activity in summary.accounts_affected
            ],
        },
    }


def validation_response(validation: TransferValidation) -> dict[str, Any]:
    return {
        "isValid": validation.is_valid,
        "eligibleTransactions": list(validation.eligible_ids),
        "ineligibleTransactions": [{"id": item.id, "reason": item.reason} for item in validation.ineligible],
        "errors": list(validation.errors),
        "warnings": list(validation.warnings),
    }


def history_response(groups: Iterable[TransferGroup]) -> list[dict[str, Any]]:
    """Serialize transfer groups as parents with nested children.

    Accounts and categories come from the maps preloaded on each group, so
    building the payload issues no queries.
    """
    payload = []
    for group in groups:
        parent = entry_payload(group.parent)
        parent["debitAccount"] = account_payload(group.accounts.get(group.parent.debit_account_id))
        parent["creditAccount"] = account_payload(group.accounts.get(group.parent.credit_account_id))

        children = []
        for child in group.children:
            item = entry_payload(child)
            item["debitAccount"] = account_payload(group.accounts.get(child.debit_account_id))
            item["creditAccount"] = account_payload(group.accounts.get(child.credit_account_id))
            item["category"] = category_payload(group.categories.get(child.category_id))
            children.append(item)

        parent["children"] = children
        payload.append(parent)
    return payload


def _row_payload(row: LedgerRow) -> dict[str, Any]:
    return {
        "entryId": row.entry_id,
        "date": _iso(row.date),
        "description": row.description,
        "referenceNumber": row.reference_number,
        "debitAmount": row.debit_amount,
        "creditAmount": row.credit_amount,
        "counterpartAccount": account_payload(row.counterpart_account),
        "postingMonth": row.posting_month,
        "postedAt": _iso(row.posted_at),
    }


def _month_payload(month: LedgerMonth) -> dict[str, Any]:
    closing = month.period_closing
    return {
        "month": month.month,
        "openingBalance": month.opening_balance,
        "rows": [_row_payload(row) for row in month.rows],
        "periodClosing": {
            "totalDebits": closing.total_debits,
            "totalCredits": closing.total_credits,
            "netAmount": closing.net_amount,
            "runningBalance": closing.running_balance,
            "balanceType": closing.balance_type.value,
            "displayBalance": closing.display_balance,
        },
    }


def ledger_view_response(view: GeneralLedgerView) -> dict[str, Any]:
    grand_total = view.grand_total
    return {
        "account": account_payload(view.account),
        "dateFrom": _iso(view.date_from),
        "dateTo": _iso(view.date_to),
        "openingBalance": view.opening_balance,
        "months": [_month_payload(month) for month in view.months],
        "grandTotal": {
            "totalDebits": grand_total.total_debits,
            "totalCredits": grand_total.total_credits,
            "netAmount": grand_total.net_amount,
            "finalBalance": grand_total.final_balance,
            "balanceType": grand_total.balance_type.value,
            "displayBalance": grand_total.display_balance,
        },
    }


def description_response(entry: Entry) -> dict[str, Any]:
    """Summary of a parent entry after its description was edited."""
    return {
        "status": ResultStatus.SUCCESS.value,
        "data": {
            "id": entry.id,
            "description": entry.description,
            "amount": entry.amount,
            "debitAccountId": entry.debit_account_id,
            "creditAccountId": entry.credit_account_id,
            "glPostingMonth": entry.gl_posting_month,
        },
    }


def bulk_record_response(result: BulkRecordResult) -> dict[str, Any]:
    return {
        "status": result.status.value,
        "message": result.message,
        "data": {
            "results": [
                {"id": outcome.entry_id, "status": outcome.status.value, "message": outcome.message}
                for outcome in result.outcomes
            ],
            "summary": {
                "total": result.total,
                "successful": result.successful,
                "failed": result.failed,
            },
        },
    }


def error_response(error: Exception) -> dict[str, Any]:
    """Map an exception to an error payload.

    Domain errors carry stable, user-facing messages. Store failures and
    anything unexpected are reduced to a fixed message so driver text and
    tracebacks never reach the caller.
    """
    if isinstance(error, PersistenceError):
        message = persistence_failure()
    elif isinstance(error, DomainError):
        message = str(error)
    else:
        message = UNEXPECTED_ERROR
    return {"status": ResultStatus.ERROR.value, "errors": [message]}
