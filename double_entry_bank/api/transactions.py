"""
Transfer and transaction API endpoints.
"""

import uuid

from fastapi import APIRouter, Depends

from double_entry_bank.api.dependencies import get_ledger_service
from double_entry_bank.api.errors import http_error
from double_entry_bank.exceptions import LedgerError
from double_entry_bank.services.ledger_service import LedgerService
from double_entry_bank.schemas.ledger import EntryResponse, TransactionResponse
from double_entry_bank.schemas.transaction import (
    OperationResponse,
    TransferRequest,
)

router = APIRouter(tags=["Transactions"])


@router.post("/transfers", response_model=OperationResponse)
def transfer(
    request: TransferRequest,
    service: LedgerService = Depends(get_ledger_service),
):
    """Transfer money between two accounts."""
    try:
        tx_id = service.transfer(
            request.from_account_id,
            request.to_account_id,
            request.amount,
            request.description,
        )
    except LedgerError as e:
        raise http_error(e)
    return OperationResponse(transaction_id=tx_id, message="transfer successful")


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: uuid.UUID,
    service: LedgerService = Depends(get_ledger_service),
):
    """Get every entry of one transaction group."""
    try:
        entries = service.get_transaction_entries(transaction_id)
    except LedgerError as e:
        raise http_error(e)
    return TransactionResponse(
        transaction_id=transaction_id,
        entries=[EntryResponse.model_validate(e) for e in entries],
    )
