"""Transaction entries exported to and read back from a CSV file."""

from __future__ import annotations

import csv
import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Mapping

from trportfolio.timeutil import format_csv_datetime, parse_csv_datetime

logger = logging.getLogger(__name__)

FIELDNAMES = (
    "ID",
    "Status",
    "Timestamp",
    "Type",
    "Asset type",
    "Name",
    "Instrument",
    "Shares",
    "Rate",
    "Realized yield",
    "Realized PnL",
    "Commission",
    "Debit",
    "Credit",
    "Tax amount",
    "Documents",
)

_FILE_PERMISSIONS = 0o600


def _format_float(value: float) -> str:
    return format(Decimal(repr(float(value))).normalize(), "f")


def _parse_float(text: str) -> float:
    return float(text) if text else 0.0


def _format_documents(documents: list[str]) -> str:
    return json.dumps(documents, ensure_ascii=False) if documents else ""


def _parse_documents(text: str) -> list[str]:
    if not text:
        return []
    documents = json.loads(text)
    if not isinstance(documents, list) or not all(isinstance(d, str) for d in documents):
        raise ValueError(f"documents must be a list of strings: {text!r}")
    return documents


def _zero_time() -> datetime:
    return datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class CSVEntry:
    """One transaction row of the CSV export."""

    id: str = ""
    status: str = ""
    timestamp: datetime = field(default_factory=_zero_time)
    type: str = ""
    asset_type: str = ""
    name: str = ""
    instrument: str = ""
    shares: float = 0.0
    rate: float = 0.0
    yield_: float = 0.0
    profit: float = 0.0
    commission: float = 0.0
    debit: float = 0.0
    credit: float = 0.0
    tax_amount: float = 0.0
    invested_amount: float = 0.0  # kept in memory only, never written
    documents: list[str] = field(default_factory=list)

    def to_row(self) -> dict[str, str]:
        """Render the entry as a mapping from CSV header to cell text."""
        return {
            "ID": self.id,
            "Status": self.status,
            "Timestamp": format_csv_datetime(self.timestamp),
            "Type": self.type,
            "Asset type": self.asset_type,
            "Name": self.name,
            "Instrument": self.instrument,
            "Shares": _format_float(self.shares),
            "Rate": _format_float(self.rate),
            "Realized yield": _format_float(self.yield_),
            "Realized PnL": _format_float(self.profit),
            "Commission": _format_float(self.commission),
            "Debit": _format_float(self.debit),
            "Credit": _format_float(self.credit),
            "Tax amount": _format_float(self.tax_amount),
            "Documents": _format_documents(self.documents),
        }

    @classmethod
    def from_row(cls, row: Mapping[str, str | None]) -> CSVEntry:
        """Build an entry from a mapping of CSV header to cell text."""

        def cell(key: str) -> str:
            return row.get(key) or ""

        return cls(
            id=cell("ID"),
            status=cell("Status"),
            timestamp=parse_csv_datetime(cell("Timestamp")),
            type=cell("Type"),
            asset_type=cell("Asset type"),
            name=cell("Name"),
            instrument=cell("Instrument"),
            shares=_parse_float(cell("Shares")),
            rate=_parse_float(cell("Rate")),
            yield_=_parse_float(cell("Realized yield")),
            profit=_parse_float(cell("Realized PnL")),
            commission=_parse_float(cell("Commission")),
            debit=_parse_float(cell("Debit")),
            credit=_parse_float(cell("Credit")),
            tax_amount=_parse_float(cell("Tax amount")),
            documents=_parse_documents(cell("Documents")),
        )


class CSVReader:
    """Reads all entries of a CSV export."""

    def read(self, filepath: str | os.PathLike) -> list[CSVEntry]:
        """Return the entries of the file, or an empty list if it does not exist."""
        try:
            handle = Path(filepath).open(newline="", encoding="utf-8")
        except FileNotFoundError:
            return []

        with handle:
            try:
                return [CSVEntry.from_row(row) for row in csv.DictReader(handle)]
            except (ValueError, csv.Error) as exc:
                raise ValueError(f"csv unmarshall error: {exc}") from exc


class CSVWriter:
    """Appends entries to a CSV export, writing the header for a new file."""

    def write(self, filepath: str | os.PathLike, entry: CSVEntry) -> None:
        """Append one entry to the file."""
        path = Path(filepath)
        new_file = not path.exists()

        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, _FILE_PERMISSIONS)
        with os.fdopen(fd, "a", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=FIELDNAMES, lineterminator="\n")
            if new_file:
                writer.writeheader()
            writer.writerow(entry.to_row())

        logger.debug("wrote csv entry %s to %s", entry.id, path)