"""
Ledger API endpoints.

Read-side views of the ledger: an account's entry history
and reconciliation of cached balances against entries.
The API layer is thin: it handles HTTP concerns and
delegates all business logic to the LedgerService.
"""

import uuid

from fastapi import APIRouter, Depends, Query

from double_entry_bank.api.dependencies import get_ledger_service
from double_entry_bank.api.errors import http_error
from double_entry_bank.exceptions import LedgerError
from double_entry_bank.services.ledger_service import LedgerService
from double_entry_bank.schemas.ledger import (
    EntryResponse,
    ReconciliationResponse,
)

router = APIRouter(tags=["Ledger"])


@router.get(
    "/accounts/{account_id}/entries",
    response_model=list[EntryResponse],
)
def get_account_entries(
    account_id: uuid.UUID,
    limit: int | None = Query(default=None),
    offset: int = Query(default=0),
    service: LedgerService = Depends(get_ledger_service),
):
    """
    Get ledger entries for an account, newest first.

    limit defaults to the configured page size and is
    capped at the configured maximum.
    """
    try:
        return service.get_account_entries(account_id, limit, offset)
    except LedgerError as e:
        raise http_error(e)


@router.get(
    "/accounts/{account_id}/reconcile",
    response_model=ReconciliationResponse,
)
def reconcile_account(
    account_id: uuid.UUID,
    service: LedgerService = Depends(get_ledger_service),
):
    """
    Compare the cached balance with SUM(credit) - SUM(debit).

    A mismatch is a normal 200 response with matched=false;
    it reports drift, it is not a server error.
    """
    try:
        result = service.reconcile_account(account_id)
    except LedgerError as e:
        raise http_error(e)
    return ReconciliationResponse.model_validate(result)


@router.get("/reconcile", response_model=list[ReconciliationResponse])
def reconcile_all(service: LedgerService = Depends(get_ledger_service)):
    """Reconcile every account in the ledger."""
    return [
        ReconciliationResponse.model_validate(result)
        for result in service.reconcile_all()
    ]
