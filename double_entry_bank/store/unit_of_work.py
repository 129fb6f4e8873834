"""
Transactional unit of work.

One call to Store.transaction() is one database transaction:
every read, lock, entry insert, and balance delta issued
through the yielded Queries either commits together or is
rolled back together. Nothing in between is ever visible to
other connections.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from double_entry_bank.exceptions import CommitFailedError, RollbackFailedError
from double_entry_bank.store.accounts import AccountStore
from double_entry_bank.store.entries import EntryStore
from double_entry_bank.store.users import UserStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Queries:
    """The data-access adapters, all bound to one transaction's session."""

    def __init__(self, session: Session):
        self.session = session
        self.accounts = AccountStore(session)
        self.entries = EntryStore(session)
        self.users = UserStore(session)


class Store:
    """
    Runs caller code inside a single storage transaction.

    The store itself holds no per-operation state, so one
    instance is shared by every concurrent caller. Each
    transaction gets its own session and connection.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        isolation_level: str | None = "SERIALIZABLE",
    ):
        self.session_factory = session_factory
        self.isolation_level = isolation_level

    @contextmanager
    def transaction(self, isolation_level: str | None = None) -> Iterator[Queries]:
        """
        Open a transaction and yield the adapters bound to it.

        On any exception from the body (including interrupts)
        the transaction is rolled back and the original error
        re-raised. If the rollback fails as well, both are
        reported together as RollbackFailedError. A failed
        commit is reported as CommitFailedError.
        """
        level = isolation_level or self.isolation_level
        session = self.session_factory()
        try:
            if level:
                # Pin the isolation level before the first statement
                session.connection(execution_options={"isolation_level": level})

            try:
                yield Queries(session)
            except BaseException as exc:
                try:
                    session.rollback()
                except SQLAlchemyError as rollback_exc:
                    logger.error(
                        "Rollback failed error=%r rollback_error=%r",
                        exc, rollback_exc,
                    )
                    raise RollbackFailedError(exc, rollback_exc) from exc
                raise

            try:
                session.commit()
            except SQLAlchemyError as exc:
                raise CommitFailedError(exc) from exc
        finally:
            session.close()

    def run(
        self,
        fn: Callable[[Queries], T],
        isolation_level: str | None = None,
    ) -> T:
        """Call fn with the transaction's adapters and return its result."""
        with self.transaction(isolation_level) as queries:
            return fn(queries)

    def ping(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        with self.session_factory() as session:
            session.execute(text("SELECT 1"))
