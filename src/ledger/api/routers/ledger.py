"""Payee and category lookups."""

from fastapi import APIRouter, Depends

from ledger.api.deps import get_query_service
from ledger.services import LedgerQueryService

router = APIRouter(tags=["ledger"])


@router.get("/payees", response_model=list[str])
def list_payees(query: LedgerQueryService = Depends(get_query_service)) -> list[str]:
    """Distinct payees, alphabetical."""
    return query.list_payees()


@router.get("/categories", response_model=list[str])
def list_categories(query: LedgerQueryService = Depends(get_query_service)) -> list[str]:
    """Distinct categories in use, excluding transfers."""
    return query.list_categories()
