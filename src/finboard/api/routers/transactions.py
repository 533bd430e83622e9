"""Transaction (ledger entry) endpoints."""

from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from finboard.api.auth import get_current_owner
from finboard.api.deps import get_ledger_service, get_csv_exporter
from finboard.api.schemas import (
    MessageResponse,
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransactionOut,
    TransactionResponse,
    SummaryOut,
    TransactionListResponse,
    MonthlyTotalOut,
    CategoryTotalOut,
    StatsSummaryResponse,
)
from finboard.core.exceptions import ValidationError
from finboard.core.timezone import parse_datetime_utc
from finboard.csv import CsvExporter
from finboard.domain.models import EntryKind, LedgerEntry
from finboard.domain.views import EntryFilters
from finboard.services import LedgerService, EntryCreate, EntryUpdate
from finboard.services.ledger_service import DEFAULT_MONTHS_BACK

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _entry_to_out(entry: LedgerEntry) -> TransactionOut:
    return TransactionOut(
        id=entry.entry_id,
        type=entry.kind,
        category=entry.category,
        amount=float(entry.amount),
        date=entry.occurred_on,
        description=entry.note or "",
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


def _parse_bound(value: Optional[str], name: str, end_of_day: bool = False) -> Optional[datetime]:
    """Parse a date filter. A bare YYYY-MM-DD end bound covers the whole day."""
    if not value:
        return None
    try:
        parsed = parse_datetime_utc(value)
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date format for {name}: {value}")
    if end_of_day and len(value.strip()) == 10:
        parsed = parsed + timedelta(days=1) - timedelta(microseconds=1)
    return parsed


def _filters(
    type: Optional[EntryKind] = Query(None, description="income or expense"),
    category: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    sort: str = Query("-date", description="Field to sort by; prefix with '-' for descending"),
) -> EntryFilters:
    return EntryFilters(
        kind=type,
        category=category.strip() if category else None,
        start_date=_parse_bound(start_date, "startDate"),
        end_date=_parse_bound(end_date, "endDate", end_of_day=True),
        sort=sort,
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreateRequest,
    owner_id: str = Depends(get_current_owner),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Record a new income or expense."""
    entry = ledger.record_entry(
        owner_id,
        EntryCreate(
            kind=data.type,
            category=data.category,
            amount=data.amount,
            occurred_on=data.date,
            note=data.description,
        ),
    )
    return TransactionResponse(transaction=_entry_to_out(entry))


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    filters: EntryFilters = Depends(_filters),
    owner_id: str = Depends(get_current_owner),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """List the caller's transactions with totals over the same filters."""
    entries = ledger.list_entries(owner_id, filters)
    summary = ledger.summarize(owner_id, filters)
    return TransactionListResponse(
        count=len(entries),
        transactions=[_entry_to_out(e) for e in entries],
        summary=SummaryOut(
            total_income=float(summary.total_income),
            total_expense=float(summary.total_expense),
            net_balance=float(summary.net_balance),
        ),
    )


@router.get("/export")
def export_transactions(
    filters: EntryFilters = Depends(_filters),
    owner_id: str = Depends(get_current_owner),
    exporter: CsvExporter = Depends(get_csv_exporter),
) -> Response:
    """Download the caller's filtered transactions as CSV."""
    return Response(
        content=exporter.export_entries(owner_id, filters),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="transactions.csv"'},
    )


@router.get("/stats/summary", response_model=StatsSummaryResponse)
def get_stats_summary(
    months: int = Query(DEFAULT_MONTHS_BACK, ge=1, le=120),
    owner_id: str = Depends(get_current_owner),
    ledger: LedgerService = Depends(get_ledger_service),
) -> StatsSummaryResponse:
    """Monthly and per-category totals over the trailing months."""
    breakdown = ledger.period_breakdown(owner_id, months_back=months)
    return StatsSummaryResponse(
        months=months,
        start_date=breakdown.start_date,
        monthly_data=[
            MonthlyTotalOut(year=m.year, month=m.month, type=m.kind, total=float(m.total))
            for m in breakdown.monthly
        ],
        category_data=[
            CategoryTotalOut(category=c.category, type=c.kind, total=float(c.total))
            for c in breakdown.categories
        ],
    )


@router.get("/{entry_id}", response_model=TransactionResponse)
def get_transaction(
    entry_id: str,
    owner_id: str = Depends(get_current_owner),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Get a single transaction."""
    return TransactionResponse(transaction=_entry_to_out(ledger.get_entry(owner_id, entry_id)))


@router.put("/{entry_id}", response_model=TransactionResponse)
def update_transaction(
    entry_id: str,
    data: TransactionUpdateRequest,
    owner_id: str = Depends(get_current_owner),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Update a transaction; omitted fields are kept."""
    entry = ledger.update_entry(
        owner_id,
        entry_id,
        EntryUpdate(
            kind=data.type,
            category=data.category,
            amount=data.amount,
            occurred_on=data.date,
            note=data.description,
        ),
    )
    return TransactionResponse(transaction=_entry_to_out(entry))


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_transaction(
    entry_id: str,
    owner_id: str = Depends(get_current_owner),
    ledger: LedgerService = Depends(get_ledger_service),
) -> MessageResponse:
    """Delete a transaction."""
    ledger.delete_entry(owner_id, entry_id)
    return MessageResponse(message="Transaction deleted")
