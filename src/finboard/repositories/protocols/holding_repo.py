"""Holding repository protocol."""

from typing import Protocol, Optional

from finboard.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        ...

    def get_by_id(self, holding_id: str) -> Optional[Holding]:
        """Retrieve holding by ID regardless of owner."""
        ...

    def get_by_owner_and_symbol(self, owner_id: str, symbol: str) -> Optional[Holding]:
        """Retrieve the owner's holding for a symbol, if any."""
        ...

    def list_by_owner(self, owner_id: str) -> list[Holding]:
        """List all holdings for an owner, ordered by symbol."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Update an existing holding."""
        ...

    def delete(self, holding_id: str) -> None:
        """Delete a holding (hard delete)."""
        ...
