"""
Backup and Export

Two download formats:
1. JSON backup - the whole Store, re-importable through Store.initial()
2. CSV - transactions only, for spreadsheets
"""

import csv
import io
import json
from datetime import date

from lifehub.models.store import Store
from lifehub.services.storage.interface import snapshot_payload


CSV_HEADER = ("date", "type", "category", "amount", "note")


def to_json_backup(store: Store) -> str:
    """Pretty-printed JSON of the complete Store, camelCase keys."""
    return json.dumps(snapshot_payload(store), indent=2, ensure_ascii=False)


def _csv_amount(amount: float):
    return int(amount) if amount.is_integer() else amount


def to_csv(store: Store) -> str:
    """
    Transactions as CSV, in Store order (newest first).

    Text fields are wrapped in double quotes with inner quotes doubled;
    the amount is written as a bare number. Rows are joined with newlines.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for t in store.transactions:
        writer.writerow([
            t.date.isoformat(),
            t.kind.value,
            t.category,
            _csv_amount(t.amount),
            t.note or "",
        ])
    rows = buffer.getvalue().rstrip("\n")
    header = ",".join(CSV_HEADER)
    return f"{header}\n{rows}" if rows else header


def backup_filename(today: date) -> str:
    return f"lifehub-backup-{today.isoformat()}.json"


def csv_filename(today: date) -> str:
    return f"lifehub-transactions-{today.isoformat()}.csv"
