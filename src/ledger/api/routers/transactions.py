"""Transaction ledger endpoints."""

from fastapi import APIRouter, Depends, status

from ledger.api.deps import get_transaction_service, get_query_service
from ledger.api.schemas import (
    TransactionCreateRequest,
    InvestmentTransactionRequest,
    TransactionUpdateRequest,
    TransactionResponse,
    TransactionListResponse,
)
from ledger.services import (
    TransactionService,
    LedgerQueryService,
    TransactionCreate,
    InvestmentTransactionCreate,
    TransactionUpdate,
    InvestmentTransactionUpdate,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    query: LedgerQueryService = Depends(get_query_service),
) -> TransactionListResponse:
    """List every transaction, newest first."""
    transactions = query.list_all_transactions()
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )


@router.get("/{txn_id}", response_model=TransactionResponse)
def get_transaction(
    txn_id: int,
    query: LedgerQueryService = Depends(get_query_service),
) -> TransactionResponse:
    return TransactionResponse.model_validate(query.get_transaction(txn_id))


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    request: TransactionCreateRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Create a transaction.

    A payee equal to another account's name records a transfer to that account.
    """
    txn = service.create_transaction(TransactionCreate(**request.model_dump()))
    return TransactionResponse.model_validate(txn)


@router.post("/investment", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_investment_transaction(
    request: InvestmentTransactionRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """Record a buy or sell."""
    data = InvestmentTransactionCreate(**request.model_dump(exclude={"notes"}))
    return TransactionResponse.model_validate(service.create_investment_transaction(data))


@router.put("/{txn_id}", response_model=TransactionResponse)
def update_transaction(
    txn_id: int,
    request: TransactionUpdateRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """Replace a transaction's fields; transfer counterparts follow."""
    txn = service.update_transaction(txn_id, TransactionUpdate(**request.model_dump()))
    return TransactionResponse.model_validate(txn)


@router.put("/{txn_id}/investment", response_model=TransactionResponse)
def update_investment_transaction(
    txn_id: int,
    request: InvestmentTransactionRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """Replace a trade, recomputing its amount."""
    data = InvestmentTransactionUpdate(**request.model_dump())
    return TransactionResponse.model_validate(service.update_investment_transaction(txn_id, data))


@router.delete("/{txn_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    txn_id: int,
    service: TransactionService = Depends(get_transaction_service),
) -> None:
    """Delete a transaction (and its transfer counterpart)."""
    service.delete_transaction(txn_id)
