"""Ownership guard for id-addressed records."""

from typing import Optional, Protocol, TypeVar

from finboard.core.exceptions import NotFoundError, NotAuthorizedError


class Owned(Protocol):
    owner_id: str


R = TypeVar("R", bound=Owned)


def load_owned(record: Optional[R], owner_id: str, resource: str, record_id: str) -> R:
    """
    Return the record if the caller owns it.

    Raises NotFoundError when the record is absent and NotAuthorizedError
    when it exists but belongs to someone else.
    """
    if record is None:
        raise NotFoundError(resource, record_id)
    if record.owner_id != owner_id:
        raise NotAuthorizedError(resource, record_id)
    return record
