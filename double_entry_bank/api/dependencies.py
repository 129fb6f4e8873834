"""
FastAPI dependencies.

The store and settings are built once by the application
lifespan and kept on app.state. Tests swap them out with
app.dependency_overrides.
"""

from fastapi import Depends, Request

from double_entry_bank.config import Settings
from double_entry_bank.services.account_service import AccountService
from double_entry_bank.services.ledger_service import LedgerService
from double_entry_bank.store.unit_of_work import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_ledger_service(
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> LedgerService:
    return LedgerService(store, settings)


def get_account_service(
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(store, settings)
