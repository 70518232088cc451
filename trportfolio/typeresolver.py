"""Works out the kind of a transaction from its event type and details."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from trportfolio.details import (
    ORDER_TYPE_TEXTS_PURCHASE,
    ORDER_TYPE_TEXTS_SALE,
    OVERVIEW_DATA_TITLE_ORDER_TYPE,
    NormalizedResponse,
    SectionDataTitleNotFoundError,
)
from trportfolio.transactions import EventType

logger = logging.getLogger(__name__)


class TransactionType(str, Enum):
    """Kinds of transaction."""

    UNSUPPORTED = "Unsupported"
    SALE = "Sale"
    PURCHASE = "Purchase"
    DIVIDEND_PAYOUT = "Dividend payout"
    ROUND_UP = "Round up"
    SAVEBACK = "Saveback"
    CARD_PAYMENT = "Card payment"
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    INTEREST_PAYOUT = "Interest payout"

    def __str__(self) -> str:
        return self.value


class UnsupportedTypeError(ValueError):
    """Raised when no detector recognises a transaction."""


Detector = Callable[[str, NormalizedResponse], bool]


def _order_type_contains(response: NormalizedResponse, text: str) -> bool:
    try:
        order_type = response.overview.get_data_by_titles(OVERVIEW_DATA_TITLE_ORDER_TYPE)
    except SectionDataTitleNotFoundError:
        return False
    return text in order_type.detail.text


def purchase_detector(event_type: str, response: NormalizedResponse) -> bool:
    """Savings plan executions, or orders whose order type reads as a purchase."""
    if event_type in (EventType.SAVINGS_PLAN_EXECUTED, EventType.SAVINGS_PLAN_INVOICE_CREATED):
        return True
    return _order_type_contains(response, ORDER_TYPE_TEXTS_PURCHASE)


def sale_detector(event_type: str, response: NormalizedResponse) -> bool:
    """Orders whose order type reads as a sale."""
    return _order_type_contains(response, ORDER_TYPE_TEXTS_SALE)


def round_up_detector(event_type: str, response: NormalizedResponse) -> bool:
    """Spare change executions."""
    return event_type == EventType.BENEFITS_SPARE_CHANGE_EXECUTION


def saveback_detector(event_type: str, response: NormalizedResponse) -> bool:
    """Saveback executions."""
    return event_type == EventType.BENEFITS_SAVEBACK_EXECUTION


def deposit_detector(event_type: str, response: NormalizedResponse) -> bool:
    """Incoming payments."""
    return event_type in (EventType.PAYMENT_INBOUND, EventType.PAYMENT_INBOUND_SEPA_DIRECT_DEBIT)


def interest_payout_detector(event_type: str, response: NormalizedResponse) -> bool:
    """Interest payouts."""
    return event_type in (EventType.INTEREST_PAYOUT_CREATED, EventType.INTEREST_PAYOUT)


def dividend_payout_detector(event_type: str, response: NormalizedResponse) -> bool:
    """Credits and cash corporate actions."""
    return event_type in (EventType.CREDIT, EventType.SSP_CORPORATE_ACTION_INVOICE_CASH)


def withdrawal_detector(event_type: str, response: NormalizedResponse) -> bool:
    """Outgoing payments."""
    return event_type == EventType.PAYMENT_OUTBOUND


class TypeResolver:
    """Tries detectors in turn; the costly ones come last."""

    def __init__(self) -> None:
        self._detectors: dict[TransactionType, Detector] = {
            TransactionType.DEPOSIT: deposit_detector,
            TransactionType.WITHDRAWAL: withdrawal_detector,
            TransactionType.DIVIDEND_PAYOUT: dividend_payout_detector,
            TransactionType.ROUND_UP: round_up_detector,
            TransactionType.SAVEBACK: saveback_detector,
            TransactionType.INTEREST_PAYOUT: interest_payout_detector,
            TransactionType.PURCHASE: purchase_detector,
            TransactionType.SALE: sale_detector,
        }

    def resolve(self, event_type: str, response: NormalizedResponse) -> TransactionType:
        """Return the kind of the transaction, or raise if none matches."""
        for transaction_type, detector in self._detectors.items():
            if detector(event_type, response):
                logger.debug("%s transaction resolved for %s", transaction_type, response.id)
                return transaction_type

        raise UnsupportedTypeError("could not resolve transaction type")