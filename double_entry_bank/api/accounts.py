"""
User and account API endpoints.

Deposits and withdrawals live here because they act on a
single account; transfers have their own router.
"""

import uuid

from fastapi import APIRouter, Depends

from double_entry_bank.api.dependencies import (
    get_account_service,
    get_ledger_service,
)
from double_entry_bank.api.errors import http_error
from double_entry_bank.exceptions import LedgerError
from double_entry_bank.services.account_service import AccountService
from double_entry_bank.services.ledger_service import LedgerService
from double_entry_bank.schemas.account import (
    UserCreate,
    UserResponse,
    AccountOpen,
    AccountResponse,
)
from double_entry_bank.schemas.transaction import (
    AmountRequest,
    OperationResponse,
)

router = APIRouter(tags=["Accounts"])


# --- User Endpoints ---

@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(
    request: UserCreate,
    service: AccountService = Depends(get_account_service),
):
    """Create a new account owner."""
    try:
        return service.create_user(request.email)
    except LedgerError as e:
        raise http_error(e)


# --- Account Endpoints ---

@router.post("/accounts", response_model=AccountResponse, status_code=201)
def open_account(
    request: AccountOpen,
    service: AccountService = Depends(get_account_service),
):
    """
    Open a new account for an existing user.

    The account starts with a balance of 0.0000.
    """
    try:
        return service.open_account(
            request.owner_id, request.name, request.currency
        )
    except LedgerError as e:
        raise http_error(e)


@router.get("/accounts", response_model=list[AccountResponse])
def list_accounts(
    owner_id: uuid.UUID,
    service: AccountService = Depends(get_account_service),
):
    """List a user's accounts, newest first."""
    return service.list_accounts(owner_id)


@router.get("/accounts/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: uuid.UUID,
    service: AccountService = Depends(get_account_service),
):
    """Get account details, including its cached balance."""
    try:
        return service.get_account(account_id)
    except LedgerError as e:
        raise http_error(e)


@router.post("/accounts/{account_id}/deposit", response_model=OperationResponse)
def deposit(
    account_id: uuid.UUID,
    request: AmountRequest,
    service: LedgerService = Depends(get_ledger_service),
):
    """Deposit external money into an account."""
    try:
        tx_id = service.deposit(account_id, request.amount, request.description)
    except LedgerError as e:
        raise http_error(e)
    return OperationResponse(transaction_id=tx_id, message="deposit successful")


@router.post("/accounts/{account_id}/withdraw", response_model=OperationResponse)
def withdraw(
    account_id: uuid.UUID,
    request: AmountRequest,
    service: LedgerService = Depends(get_ledger_service),
):
    """Withdraw money from an account to the outside."""
    try:
        tx_id = service.withdraw(account_id, request.amount, request.description)
    except LedgerError as e:
        raise http_error(e)
    return OperationResponse(transaction_id=tx_id, message="withdrawal successful")
