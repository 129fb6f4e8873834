"""
ORM-level immutability for ledger entries.

Entries are the audit trail. Any UPDATE or DELETE of a
persisted Entry issued through the ORM is rejected before
the SQL reaches the database. There is no code path in the
ledger that mutates an entry; these listeners make sure one
cannot be added by accident.
"""

from sqlalchemy import event

from double_entry_bank.exceptions import ImmutableEntryError
from double_entry_bank.models.entry import Entry


def _reject_entry_update(mapper, connection, target):
    raise ImmutableEntryError(target.id, "updated")


def _reject_entry_delete(mapper, connection, target):
    raise ImmutableEntryError(target.id, "deleted")


def register_immutability_listeners() -> None:
    """Attach the listeners once; repeated calls are no-ops."""
    if not event.contains(Entry, "before_update", _reject_entry_update):
        event.listen(Entry, "before_update", _reject_entry_update)
    if not event.contains(Entry, "before_delete", _reject_entry_delete):
        event.listen(Entry, "before_delete", _reject_entry_delete)
