"""Account management endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ledger.api.deps import (
    get_account_service,
    get_query_service,
    get_summary_service,
    get_app_settings,
)
from ledger.api.schemas import (
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountRenameRequest,
    AccountResponse,
    AccountListResponse,
    TransactionResponse,
    TransactionListResponse,
)
from ledger.config.settings import Settings
from ledger.services import AccountService, AccountSummaryService, LedgerQueryService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=AccountListResponse)
def list_accounts(
    target_currency: Optional[str] = Query(None, description="Currency for accounts without one"),
    summary: AccountSummaryService = Depends(get_summary_service),
    settings: Settings = Depends(get_app_settings),
) -> AccountListResponse:
    """List accounts with balances converted from their transactions."""
    accounts = summary.list_accounts(target_currency)
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
        target_currency=(target_currency or settings.target_currency).strip().upper(),
    )


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    request: AccountCreateRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create an account, optionally with an opening balance."""
    account = service.create_account(
        name=request.name,
        opening_balance=request.opening_balance,
        currency=request.currency,
        kind=request.kind,
    )
    return AccountResponse.model_validate(account)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get a single account with its stored balance."""
    return AccountResponse.model_validate(service.get_account(account_id))


@router.put("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    request: AccountUpdateRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Update an account's name and currency."""
    account = service.update_account(
        account_id,
        name=request.name,
        currency=request.currency,
        kind=request.kind,
    )
    return AccountResponse.model_validate(account)


@router.put("/{account_id}/name", response_model=AccountResponse)
def rename_account(
    account_id: int,
    request: AccountRenameRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Rename an account."""
    return AccountResponse.model_validate(service.rename_account(account_id, request.name))


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: int,
    service: AccountService = Depends(get_account_service),
) -> None:
    """Delete an account and all of its transactions."""
    service.delete_account(account_id)


@router.get("/{account_id}/transactions", response_model=TransactionListResponse)
def list_account_transactions(
    account_id: int,
    query: LedgerQueryService = Depends(get_query_service),
) -> TransactionListResponse:
    """List an account's transactions, newest first."""
    transactions = query.list_transactions(account_id)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )
