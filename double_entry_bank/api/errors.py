"""
Translate ledger errors into HTTP errors.

The routes stay thin: they catch LedgerError and hand it
here, and the status code follows from the error kind.
"""

from fastapi import HTTPException

from double_entry_bank.exceptions import (
    CLIENT_ERROR_KINDS,
    NOT_FOUND_KINDS,
    ErrorKind,
    LedgerError,
)


def status_for(error: LedgerError) -> int:
    if error.kind in CLIENT_ERROR_KINDS:
        return 400
    if error.kind in NOT_FOUND_KINDS:
        return 404
    if error.kind == ErrorKind.USER_ALREADY_EXISTS:
        return 409
    if error.kind in (ErrorKind.COMMIT_FAILED, ErrorKind.ROLLBACK_FAILED):
        # Nothing was persisted; the caller may retry
        return 503
    return 500


def http_error(error: LedgerError) -> HTTPException:
    return HTTPException(status_code=status_for(error), detail=error.to_dict())
