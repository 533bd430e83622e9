"""CSV export of ledger entries."""

import csv
import io
from typing import Optional

from finboard.domain.views import EntryFilters
from finboard.services.ledger_service import LedgerService

CSV_COLUMNS = [
    "date",
    "type",
    "category",
    "amount",
    "note",
]


class CsvExporter:
    """
    CSV exporter for ledger entries.

    Produces the same filtered, sorted set the entry listing returns.
    """

    def __init__(self, ledger_service: LedgerService):
        self._ledger = ledger_service

    def export_entries(self, owner_id: str, filters: Optional[EntryFilters] = None) -> str:
        """Return the owner's entries matching filters as CSV text with a header row."""
        entries = self._ledger.list_entries(owner_id, filters)

        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, lineterminator="\n")
        writer.writeheader()
        for entry in entries:
            writer.writerow({
                "date": entry.occurred_on.date().isoformat(),
                "type": entry.kind.value,
                "category": entry.category,
                "amount": str(entry.amount),
                "note": entry.note or "",
            })
        return buffer.getvalue()
