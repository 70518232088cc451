"""Timeline details: response sections and the client that fetches them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from trportfolio.wsclient import WSClient, WSClientError

REQUEST_DATA_TYPE = "timelineDetailV2"

# strptime formats of the timestamps found in detail responses.
RESPONSE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
RESPONSE_TIME_FORMAT_ALT = "%Y-%m-%dT%H:%M:%S.%f%z"

RESPONSE_SECTION_TYPE_VALUE_HEADER = "header"
RESPONSE_SECTION_TYPE_VALUE_TABLE = "table"
RESPONSE_SECTION_TYPE_VALUE_HORIZONTAL_TABLE = "horizontalTable"
RESPONSE_SECTION_TYPE_VALUE_DOCUMENTS = "documents"

SECTION_TITLE_OVERVIEW = "Übersicht"
SECTION_TITLE_PERFORMANCE = "Performance"
SECTION_TITLE_TRANSACTION = "Transaktion"
SECTION_TITLE_TRANSACTION_ALT = "Geschäft"
SECTION_TITLE_SAVING_PLAN = "Sparplan"

OVERVIEW_DATA_TITLE_ORDER_TYPE = "Orderart"
OVERVIEW_DATA_TITLE_ASSET = "Asset"
OVERVIEW_DATA_TITLE_UNDERLYING_ASSET = "Basiswert"
OVERVIEW_DATA_TITLE_SECURITY = "Wertpapier"

TRANSACTION_DATA_TITLE_SHARES = "Anteile"
TRANSACTION_DATA_TITLE_SHARES_ALT = "Aktien"
TRANSACTION_DATA_TITLE_RATE = "Aktienkurs"
TRANSACTION_DATA_TITLE_RATE_ALT = "Anteilspreis"
TRANSACTION_DATA_TITLE_RATE_ALT2 = "Dividende je Aktie"
TRANSACTION_DATA_TITLE_RATE_ALT3 = "Dividende pro Aktie"
TRANSACTION_DATA_TITLE_COMMISSION = "Gebühr"
TRANSACTION_DATA_TITLE_TOTAL = "Gesamt"
TRANSACTION_DATA_TITLE_TAX = "Steuern"

PERFORMANCE_DATA_TITLE_YIELD = "Rendite"
PERFORMANCE_DATA_TITLE_PROFIT = "Gewinn"
PERFORMANCE_DATA_TITLE_LOSS = "Verlust"

ORDER_TYPE_TEXTS_SALE = "Verkauf"
ORDER_TYPE_TEXTS_PURCHASE = "Kauf"

TREND_NEGATIVE = "negative"


class SectionDataTitleNotFoundError(LookupError):
    """Raised when a table holds no row with any of the wanted titles."""


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} is not a string: {value!r}")
    return value


def _object(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} is not an object: {value!r}")
    return value


def _list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what} is not a list: {value!r}")
    return value


@dataclass
class SectionAction:
    """Action attached to a section or row; its payload may be of any JSON type."""

    payload: Any = None
    type: str = ""

    @classmethod
    def _from_value(cls, value: Any) -> SectionAction:
        data = _object(value, "action")
        return cls(payload=data.get("payload"), type=_str(data, "type"))


@dataclass
class HeaderSectionData:
    """Data of the header section."""

    icon: str = ""
    status: str = ""
    subtitle_text: str = ""
    timestamp: str = ""


@dataclass
class HeaderSection:
    """The header section, present in every detail response."""

    action: SectionAction = field(default_factory=SectionAction)
    data: HeaderSectionData = field(default_factory=HeaderSectionData)
    title: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HeaderSection:
        """Build the section from its decoded JSON object."""
        section = _object(data, "header section")
        header_data = _object(section.get("data"), "header data")
        return cls(
            action=SectionAction._from_value(section.get("action")),
            data=HeaderSectionData(
                icon=_str(header_data, "icon"),
                status=_str(header_data, "status"),
                subtitle_text=_str(header_data, "subtitleText"),
                timestamp=_str(header_data, "timestamp"),
            ),
            title=_str(section, "title"),
            type=_str(section, "type"),
        )


@dataclass
class TableSectionDataDetail:
    """The value part of a table row."""

    action: SectionAction = field(default_factory=SectionAction)
    functional_style: str = ""
    amount: str = ""
    icon: str = ""
    status: str = ""
    subtitle: str = ""
    timestamp: str = ""
    title: str = ""
    text: str = ""
    trend: str = ""
    type: str = ""

    @classmethod
    def _from_value(cls, value: Any) -> TableSectionDataDetail:
        data = _object(value, "row detail")
        return cls(
            action=SectionAction._from_value(data.get("action")),
            functional_style=_str(data, "functionalStyle"),
            amount=_str(data, "amount"),
            icon=_str(data, "icon"),
            status=_str(data, "status"),
            subtitle=_str(data, "subtitle"),
            timestamp=_str(data, "timestamp"),
            title=_str(data, "title"),
            text=_str(data, "text"),
            trend=_str(data, "trend"),
            type=_str(data, "type"),
        )


@dataclass
class TableSectionData:
    """One row of a table section."""

    detail: TableSectionDataDetail = field(default_factory=TableSectionDataDetail)
    style: str = ""
    title: str = ""

    @classmethod
    def _from_value(cls, value: Any) -> TableSectionData:
        data = _object(value, "table row")
        return cls(
            detail=TableSectionDataDetail._from_value(data.get("detail")),
            style=_str(data, "style"),
            title=_str(data, "title"),
        )


@dataclass
class TableSection:
    """A table section made of titled rows."""

    data: list[TableSectionData] = field(default_factory=list)
    title: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TableSection:
        """Build the section from its decoded JSON object."""
        section = _object(data, "table section")
        return cls(
            data=[TableSectionData._from_value(row) for row in _list(section.get("data"), "table data")],
            title=_str(section, "title"),
            type=_str(section, "type"),
        )

    def get_data_by_titles(self, *titles: str) -> TableSectionData:
        """Return the first row whose title is one of the given titles."""
        for row in self.data:
            if row.title in titles:
                return row

        raise SectionDataTitleNotFoundError(f"section data title not found ({list(titles)})")


@dataclass
class DocumentsSectionData:
    """One document of a documents section."""

    action: SectionAction = field(default_factory=SectionAction)
    detail: str = ""
    id: str = ""
    postbox_type: str = ""
    title: str = ""

    @classmethod
    def _from_value(cls, value: Any) -> DocumentsSectionData:
        data = _object(value, "document")
        return cls(
            action=SectionAction._from_value(data.get("action")),
            detail=_str(data, "detail"),
            id=_str(data, "id"),
            postbox_type=_str(data, "postboxType"),
            title=_str(data, "title"),
        )


@dataclass
class DocumentsSection:
    """The section listing the documents of an item."""

    data: list[DocumentsSectionData] = field(default_factory=list)
    title: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocumentsSection:
        """Build the section from its decoded JSON object."""
        section = _object(data, "documents section")
        return cls(
            data=[
                DocumentsSectionData._from_value(doc)
                for doc in _list(section.get("data"), "documents data")
            ],
            title=_str(section, "title"),
            type=_str(section, "type"),
        )


@dataclass
class DetailsResponse:
    """Raw detail response: an id and untyped sections."""

    id: str = ""
    sections: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DetailsResponse:
        """Build the response from its decoded JSON object."""
        response = _object(data, "details response")
        sections = [
            dict(_object(section, "section"))
            for section in _list(response.get("sections"), "sections")
        ]
        return cls(id=_str(response, "id"), sections=sections)


@dataclass
class NormalizedResponse:
    """Detail response with its sections sorted out by kind."""

    id: str = ""
    header: HeaderSection = field(default_factory=HeaderSection)
    overview: TableSection = field(default_factory=TableSection)
    performance: TableSection = field(default_factory=TableSection)
    transaction: TableSection = field(default_factory=TableSection)
    documents: DocumentsSection = field(default_factory=DocumentsSection)


class DetailsClient:
    """Fetches the details of timeline items."""

    def __init__(self, reader: Any) -> None:
        self._client = WSClient(REQUEST_DATA_TYPE, reader)

    def fetch(self, item_id: str) -> DetailsResponse:
        """Return the detail response of one item."""
        raw = self._client.details(item_id)
        try:
            return DetailsResponse.from_dict(raw)
        except ValueError as exc:
            raise WSClientError(f"could not unmarshal {REQUEST_DATA_TYPE} response: {exc}") from exc