"""SQLAlchemy implementation of HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from finboard.core.timezone import now_utc, to_storage, from_storage
from finboard.domain.models import Holding
from finboard.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        orm_holding = HoldingORM(
            holding_id=holding.holding_id,
            owner_id=holding.owner_id,
            symbol=holding.symbol,
            shares=holding.shares,
            cost_basis=holding.cost_basis,
            created_at=to_storage(holding.created_at or now_utc()),
        )
        self._db.add(orm_holding)
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def get_by_id(self, holding_id: str) -> Optional[Holding]:
        """Retrieve holding by ID."""
        orm_holding = self._db.query(HoldingORM).filter(
            HoldingORM.holding_id == holding_id
        ).first()
        return self._to_domain(orm_holding) if orm_holding else None

    def get_by_owner_and_symbol(self, owner_id: str, symbol: str) -> Optional[Holding]:
        """Retrieve the owner's holding for a symbol."""
        orm_holding = (
            self._db.query(HoldingORM)
            .filter(
                HoldingORM.owner_id == owner_id,
                HoldingORM.symbol == symbol,
            )
            .first()
        )
        return self._to_domain(orm_holding) if orm_holding else None

    def list_by_owner(self, owner_id: str) -> list[Holding]:
        """List all holdings for an owner."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.owner_id == owner_id)
            .order_by(HoldingORM.symbol)
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def update(self, holding: Holding) -> Holding:
        """Update an existing holding."""
        orm_holding = self._db.query(HoldingORM).filter(
            HoldingORM.holding_id == holding.holding_id
        ).first()
        if not orm_holding:
            raise ValueError(f"Holding not found: {holding.holding_id}")

        orm_holding.symbol = holding.symbol
        orm_holding.shares = holding.shares
        orm_holding.cost_basis = holding.cost_basis
        orm_holding.updated_at = to_storage(holding.updated_at)

        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def delete(self, holding_id: str) -> None:
        """Delete a holding."""
        self._db.query(HoldingORM).filter(
            HoldingORM.holding_id == holding_id
        ).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            holding_id=orm.holding_id,
            owner_id=orm.owner_id,
            symbol=orm.symbol,
            shares=Decimal(str(orm.shares)) if orm.shares is not None else Decimal("0"),
            cost_basis=Decimal(str(orm.cost_basis)) if orm.cost_basis is not None else Decimal("0"),
            created_at=from_storage(orm.created_at),
            updated_at=from_storage(orm.updated_at),
        )
