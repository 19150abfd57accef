"""Error taxonomy shared by the ledger services."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import InterfaceError, OperationalError


class LedgerError(Exception):
    """Base class for ledger failures reported back to the caller."""

    code = "LEDGER_ERROR"
    status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class Unauthorized(LedgerError):
    """Caller lacks admin rights."""

    code = "UNAUTHORIZED"
    status_code = 403


class InvalidAmount(LedgerError):
    """Delta is not a usable integer amount."""

    code = "INVALID_AMOUNT"
    status_code = 400


class InsufficientBalance(LedgerError):
    """Redemption exceeds spendable points."""

    code = "INSUFFICIENT_BALANCE"
    status_code = 400


class UpdateFailed(LedgerError):
    """The balance write affected zero rows."""

    code = "UPDATE_FAILED"
    status_code = 409


class StoreUnavailable(LedgerError):
    """The balance store could not be reached."""

    code = "STORE_UNAVAILABLE"
    status_code = 503


class ProfileNotFound(LedgerError):
    code = "PROFILE_NOT_FOUND"
    status_code = 404


ERROR_TYPES = (Unauthorized, InvalidAmount, InsufficientBalance, UpdateFailed, StoreUnavailable, ProfileNotFound)


def status_for(code: str | None) -> int:
    """HTTP status associated with an error code; 200 when there is none."""

    if code is None:
        return 200
    for error_type in ERROR_TYPES:
        if error_type.code == code:
            return error_type.status_code
    return LedgerError.status_code


@contextmanager
def translate_store_errors(action: str) -> Iterator[None]:
    """Re-raise transport failures from the database as ``StoreUnavailable``."""

    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        raise StoreUnavailable(f"Balance store unavailable while trying to {action}.") from exc
