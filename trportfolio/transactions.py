"""Transactions timeline: items, event types and the client that lists them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from trportfolio.constants import RESPONSE_ACTION_TYPE_TIMELINE_DETAIL
from trportfolio.wsclient import WSClient, WSClientError

REQUEST_DATA_TYPE = "timelineTransactions"


class EventType(str, Enum):
    """Event types of transaction timeline items."""

    PAYMENT_INBOUND = "PAYMENT_INBOUND"
    PAYMENT_INBOUND_SEPA_DIRECT_DEBIT = "PAYMENT_INBOUND_SEPA_DIRECT_DEBIT"
    PAYMENT_OUTBOUND = "PAYMENT_OUTBOUND"
    ORDER_EXECUTED = "ORDER_EXECUTED"
    TRADE_INVOICE_CREATED = "TRADE_INVOICE"
    SAVINGS_PLAN_EXECUTED = "SAVINGS_PLAN_EXECUTED"
    SAVINGS_PLAN_INVOICE_CREATED = "SAVINGS_PLAN_INVOICE_CREATED"
    INTEREST_PAYOUT_CREATED = "INTEREST_PAYOUT_CREATED"
    INTEREST_PAYOUT = "INTEREST_PAYOUT"
    CREDIT = "CREDIT"
    BENEFITS_SAVEBACK_EXECUTION = "benefits_saveback_execution"
    BENEFITS_SPARE_CHANGE_EXECUTION = "benefits_spare_change_execution"
    SSP_CORPORATE_ACTION_INVOICE_CASH = "ssp_corporate_action_invoice_cash"
    CARD_SUCCESSFUL_TRANSACTION = "card_successful_transaction"
    CARD_REFUND = "card_refund"

    def __str__(self) -> str:
        return self.value


class UnsupportedEventTypeError(ValueError):
    """Raised for event types that are not processed."""


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} is not a string: {value!r}")
    return value


def _object(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ValueError(f"field {key!r} is not an object: {value!r}")
    return value


@dataclass
class ResponseItemAction:
    """Action attached to a transaction."""

    payload: str = ""
    type: str = ""

    def has_details(self) -> bool:
        """Whether details of the transaction can be fetched."""
        return self.type == RESPONSE_ACTION_TYPE_TIMELINE_DETAIL and self.payload != ""


@dataclass
class ResponseItemAmount:
    """A money amount."""

    currency: str = ""
    fraction_digits: int = 0
    value: float = 0.0

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> ResponseItemAmount:
        digits = data.get("fractionDigits") or 0
        if isinstance(digits, bool) or not isinstance(digits, int) or not 0 <= digits <= 255:
            raise ValueError(f"fractionDigits is not a small unsigned integer: {digits!r}")

        value = data.get("value") or 0
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"amount value is not a number: {value!r}")

        return cls(currency=_str(data, "currency"), fraction_digits=digits, value=float(value))


@dataclass
class ResponseItem:
    """One entry of the transactions timeline."""

    action: ResponseItemAction = field(default_factory=ResponseItemAction)
    amount: ResponseItemAmount = field(default_factory=ResponseItemAmount)
    badge: Any = None
    event_type: str = ""
    icon: str = ""
    id: str = ""
    status: str = ""
    sub_amount: ResponseItemAmount = field(default_factory=ResponseItemAmount)
    subtitle: str = ""
    timestamp: str = ""
    title: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResponseItem:
        """Build an item from its decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ValueError(f"transaction item is not an object: {data!r}")

        action = _object(data, "action")

        return cls(
            action=ResponseItemAction(payload=_str(action, "payload"), type=_str(action, "type")),
            amount=ResponseItemAmount._from_dict(_object(data, "amount")),
            badge=data.get("badge"),
            event_type=_str(data, "eventType"),
            icon=_str(data, "icon"),
            id=_str(data, "id"),
            status=_str(data, "status"),
            sub_amount=ResponseItemAmount._from_dict(_object(data, "subAmount")),
            subtitle=_str(data, "subtitle"),
            timestamp=_str(data, "timestamp"),
            title=_str(data, "title"),
        )


class TransactionsClient:
    """Lists all transaction timeline items."""

    def __init__(self, reader: Any) -> None:
        self._client = WSClient(REQUEST_DATA_TYPE, reader)

    def items(self) -> list[ResponseItem]:
        """Fetch all pages of the transactions timeline."""
        raw_items = self._client.list()
        try:
            return [ResponseItem.from_dict(item) for item in raw_items]
        except ValueError as exc:
            raise WSClientError(f"could not unmarshal {REQUEST_DATA_TYPE} list response: {exc}") from exc


class EventTypeResolver:
    """Maps an item to one of the event types that are processed."""

    supported_types: tuple[EventType, ...] = (
        EventType.PAYMENT_INBOUND,
        EventType.PAYMENT_INBOUND_SEPA_DIRECT_DEBIT,
        EventType.PAYMENT_OUTBOUND,
        EventType.ORDER_EXECUTED,
        EventType.TRADE_INVOICE_CREATED,
        EventType.SAVINGS_PLAN_EXECUTED,
        EventType.SAVINGS_PLAN_INVOICE_CREATED,
        EventType.INTEREST_PAYOUT_CREATED,
        EventType.INTEREST_PAYOUT,
        EventType.CREDIT,
        EventType.BENEFITS_SAVEBACK_EXECUTION,
        EventType.BENEFITS_SPARE_CHANGE_EXECUTION,
        EventType.SSP_CORPORATE_ACTION_INVOICE_CASH,
    )

    def resolve(self, item: ResponseItem) -> EventType:
        """Return the item's event type, or raise if it is not processed."""
        for event_type in self.supported_types:
            if item.event_type == event_type.value:
                return event_type

        raise UnsupportedEventTypeError(f"unsupported event type: {item.event_type}")