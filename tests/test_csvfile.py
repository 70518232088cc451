from datetime import datetime, timezone

import pytest

from trportfolio.csvfile import CSVEntry, CSVReader, CSVWriter


def make_entry(**overrides):
    values = dict(
        id="1d9ad3b5-e65c-41f6-9c7d-96baa2a2ecad",
        status="executed",
        timestamp=datetime(2023, 11, 23, 15, 45, 24, tzinfo=timezone.utc),
        type="Purchase",
        asset_type="ETF",
        name="NASDAQ100 USD (Dist)",
        instrument="DE000A0F5UF5",
        shares=1.0,
        rate=135.14,
        commission=1.0,
        debit=136.14,
        documents=["2023-11/1d9ad3b5-e65c-41f6-9c7d-96baa2a2ecad/Abrechnung.pdf"],
    )
    values.update(overrides)
    return CSVEntry(**values)


def test_reading_missing_file_returns_empty_list(tmp_path):
    assert CSVReader().read(tmp_path / "missing.csv") == []


def test_write_then_read_round_trip(tmp_path):
    path = tmp_path / "transactions.csv"
    first = make_entry()
    second = make_entry(
        id="398687aa-748b-47aa-951a-8583c5d141bf",
        name="Amazon.com",
        shares=0.005941,
        rate=168.30,
        commission=0.0,
        debit=1.0,
        documents=["2024-10/398687aa-748b-47aa-951a-8583c5d141bf/Abrechnung Ausführung.pdf"],
    )

    writer = CSVWriter()
    writer.write(path, first)
    writer.write(path, second)

    assert CSVReader().read(path) == [first, second]


def test_header_written_only_once(tmp_path):
    path = tmp_path / "transactions.csv"
    writer = CSVWriter()
    writer.write(path, make_entry())
    writer.write(path, make_entry(id="other"))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == (
        "ID,Status,Timestamp,Type,Asset type,Name,Instrument,Shares,Rate,"
        "Realized yield,Realized PnL,Commission,Debit,Credit,Tax amount,Documents"
    )
    assert sum(line.startswith("ID,") for line in lines) == 1
    assert len(lines) == 3


def test_invested_amount_is_not_persisted(tmp_path):
    path = tmp_path / "transactions.csv"
    CSVWriter().write(path, make_entry(invested_amount=250.5))

    [entry] = CSVReader().read(path)
    assert entry.invested_amount == CSVEntry().invested_amount


def test_row_formats_floats_without_trailing_zeros():
    row = make_entry().to_row()
    assert row["Shares"] == "1"
    assert row["Debit"] == "136.14"
    assert row["Timestamp"] == "2023-11-23 15:45:24"


def test_from_row_of_to_row_is_identity():
    entry = make_entry(tax_amount=14.52, credit=40.55, documents=[])
    assert CSVEntry.from_row(entry.to_row()) == entry


def test_invalid_number_raises(tmp_path):
    path = tmp_path / "transactions.csv"
    CSVWriter().write(path, make_entry())
    content = path.read_text(encoding="utf-8").replace(",136.14,", ",abc,")
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        CSVReader().read(path)