"""Data access adapters and the unit of work that scopes them."""

from double_entry_bank.store.accounts import AccountStore
from double_entry_bank.store.entries import EntryStore
from double_entry_bank.store.users import UserStore
from double_entry_bank.store.unit_of_work import Queries, Store

__all__ = ["AccountStore", "EntryStore", "UserStore", "Queries", "Store"]
