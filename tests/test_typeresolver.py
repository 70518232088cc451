import pytest

from trportfolio.details import DetailsResponse, NormalizedResponse, TableSection
from trportfolio.normalizer import TransactionResponseNormalizer
from trportfolio.transactions import EventType
from trportfolio.typeresolver import (
    TransactionType,
    TypeResolver,
    UnsupportedTypeError,
    deposit_detector,
    purchase_detector,
    sale_detector,
    withdrawal_detector,
)

POSTBOX = "https://example.com/timeline/postbox/"


def _text(text, title, style="plain"):
    return {"detail": {"action": None, "text": text, "trend": None, "type": "text"}, "style": style, "title": title}


def _status(text):
    return {"detail": {"functionalStyle": "EXECUTED", "text": text, "type": "status"}, "style": "plain", "title": "Status"}


def _header(icon, timestamp, title, action=None):
    return {
        "action": action,
        "data": {"icon": icon, "status": "executed", "subtitleText": None, "timestamp": timestamp},
        "title": title,
        "type": "header",
    }


def _table(title, rows):
    return {"action": None, "data": rows, "title": title, "type": "table"}


def _documents(*docs):
    return {
        "action": None,
        "data": [
            {"action": {"payload": POSTBOX, "type": "browserModal"}, "detail": detail, "id": doc_id, "postboxType": postbox, "title": title}
            for doc_id, postbox, title, detail in docs
        ],
        "title": "Dokumente",
        "type": "documents",
    }


PAYMENT_OUTBOUND_01 = {
    "id": "a2597441-45f4-4ae2-a881-ab4a65aa0f0e",
    "sections": [
        _header("logos/timeline_minus_circle/v2", "2024-01-11T08:55:22.185+0000", "Du hast 1,00 € gesendet"),
        _table("Übersicht", [_status("Abgeschlossen"), _text("Mr. Bean", "An"), _text("DE00 0000 0000 0000 0000 00", "IBAN")]),
    ],
}

TRADE_INVOICE_01 = {
    "id": "91aa5f02-27f0-4a9e-8733-f90dee41f2cc",
    "sections": [
        _header(
            "logos/US00206R1023/v2",
            "2024-06-17T12:02:07.095+0000",
            "Du hast 411,45 €  investiert",
            {"payload": "US00206R1023", "type": "instrumentDetail"},
        ),
        _table("Übersicht", [_status("Ausgeführt"), _text("Kauf", "Orderart"), _text("AT&T", "Asset")]),
        _table(
            "Transaktion",
            [_text("25", "Anteile"), _text("16,42 €", "Aktienkurs"), _text("1,00 €", "Gebühr"), _text("411,45 €", "Gesamt", "highlighted")],
        ),
        _documents(
            ("6ad6cf20-7863-4b24-96ec-2a9261c302ba", "SECURITIES_SETTLEMENT", "Abrechnung", "17.06.2024"),
            ("52de9800-373f-4361-8ab9-478b1d01b45e", "COSTS_INFO_BUY_V2", "Kosteninformation", "17.06.2024"),
        ),
    ],
}

INTEREST_PAYOUT_CREATED_02 = {
    "id": "79bea4ff-5552-45a1-85b5-8977e29f3d04",
    "sections": [
        _header("logos/timeline_interest_new/v2", "2024-03-03T20:45:47.367+0000", "Du hast 20,28 EUR erhalten"),
        _table(
            "Übersicht",
            [_status("Abgeschlossen"), _text("6.294,86 €", "Durchschnittssaldo"), _text("4 %", "Jahressatz"), _text("Guthaben", "Vermögenswert")],
        ),
        _documents(("2acd16e5-efc9-4bff-b171-3a31c300a628", "INTEREST_PAYOUT_INVOICE", "Abrechnung", "03.03.2024")),
    ],
}

ORDER_EXECUTED_02 = {
    "id": "1d9ad3b5-e65c-41f6-9c7d-96baa2a2ecad",
    "sections": [
        _header(
            "logos/DE000A0F5UF5/v2",
            "2023-11-23T15:45:24.252+0000",
            "Du hast 136,14 €  investiert",
            {"payload": "DE000A0F5UF5", "type": "instrumentDetail"},
        ),
        _table("Übersicht", [_status("Ausgeführt"), _text("Kauf", "Orderart"), _text("NASDAQ100 USD (Dist)", "Asset")]),
        _table(
            "Transaktion",
            [_text("1", "Anteile"), _text("135,14 €", "Aktienkurs"), _text("1,00 €", "Gebühr"), _text("136,14 €", "Gesamt", "highlighted")],
        ),
        _documents(
            ("c9a1c524-1c54-4689-8b2f-0f1bcbb91c9d", "SECURITIES_SETTLEMENT", "Abrechnung", "23.11.2023"),
            ("b26233a9-ee80-4da9-8404-08e722fe830b", "INFO", "Basisinformationsblatt", "23.11.2023"),
            ("b582015c-7a5c-47d0-8d33-6391d414cdc7", "COSTS_INFO_BUY_V2", "Kosteninformation", "23.11.2023"),
        ),
    ],
}


def _normalize(raw):
    return TransactionResponseNormalizer().normalize(DetailsResponse.from_dict(raw))


def _with_order_type(text):
    return NormalizedResponse(
        overview=TableSection.from_dict(_table("Übersicht", [_text(text, "Orderart")])),
    )


@pytest.mark.parametrize(
    ("raw", "event_type", "expected"),
    [
        (PAYMENT_OUTBOUND_01, EventType.PAYMENT_OUTBOUND, TransactionType.WITHDRAWAL),
        (TRADE_INVOICE_01, "TRADE_INVOICE", TransactionType.PURCHASE),
        (INTEREST_PAYOUT_CREATED_02, EventType.INTEREST_PAYOUT_CREATED, TransactionType.INTEREST_PAYOUT),
        (ORDER_EXECUTED_02, EventType.ORDER_EXECUTED, TransactionType.PURCHASE),
    ],
    ids=["PaymentOutbound01", "TradeInvoice01", "InterestPayoutCreated02", "OrderExecuted02"],
)
def test_it_resolves_supported_transactions(raw, event_type, expected):
    assert TypeResolver().resolve(event_type, _normalize(raw)) == expected


def test_sale_is_resolved_from_order_type():
    response = _with_order_type("Verkauf")

    assert TypeResolver().resolve(EventType.ORDER_EXECUTED, response) == TransactionType.SALE
    assert purchase_detector(EventType.ORDER_EXECUTED, response) is False


def test_savings_plan_is_purchase_without_overview():
    assert purchase_detector(EventType.SAVINGS_PLAN_EXECUTED, NormalizedResponse()) is True
    assert sale_detector(EventType.SAVINGS_PLAN_EXECUTED, NormalizedResponse()) is False


@pytest.mark.parametrize(
    ("event_type", "expected"),
    [
        (EventType.PAYMENT_INBOUND, TransactionType.DEPOSIT),
        (EventType.PAYMENT_INBOUND_SEPA_DIRECT_DEBIT, TransactionType.DEPOSIT),
        (EventType.CREDIT, TransactionType.DIVIDEND_PAYOUT),
        (EventType.SSP_CORPORATE_ACTION_INVOICE_CASH, TransactionType.DIVIDEND_PAYOUT),
        (EventType.BENEFITS_SPARE_CHANGE_EXECUTION, TransactionType.ROUND_UP),
        (EventType.BENEFITS_SAVEBACK_EXECUTION, TransactionType.SAVEBACK),
        (EventType.INTEREST_PAYOUT, TransactionType.INTEREST_PAYOUT),
    ],
)
def test_event_based_detectors(event_type, expected):
    assert TypeResolver().resolve(event_type, NormalizedResponse()) == expected


def test_detectors_accept_plain_strings():
    assert deposit_detector("PAYMENT_INBOUND", NormalizedResponse()) is True
    assert withdrawal_detector("PAYMENT_INBOUND", NormalizedResponse()) is False


def test_unsupported_transaction_raises():
    with pytest.raises(UnsupportedTypeError):
        TypeResolver().resolve(EventType.CARD_SUCCESSFUL_TRANSACTION, NormalizedResponse())