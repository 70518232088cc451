"""Sorts the sections of detail responses into normalized responses."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from trportfolio.details import (
    RESPONSE_SECTION_TYPE_VALUE_DOCUMENTS,
    RESPONSE_SECTION_TYPE_VALUE_HEADER,
    RESPONSE_SECTION_TYPE_VALUE_HORIZONTAL_TABLE,
    RESPONSE_SECTION_TYPE_VALUE_TABLE,
    SECTION_TITLE_OVERVIEW,
    SECTION_TITLE_PERFORMANCE,
    SECTION_TITLE_SAVING_PLAN,
    SECTION_TITLE_TRANSACTION,
    SECTION_TITLE_TRANSACTION_ALT,
    DetailsResponse,
    DocumentsSection,
    HeaderSection,
    NormalizedResponse,
    TableSection,
)

logger = logging.getLogger(__name__)


class SectionTypeNotFoundError(LookupError):
    """Raised when a response holds no section of the wanted type."""


class SectionContainsNoTypeError(ValueError):
    """Raised when a section of a response has no type."""


def _select_sections(response: DetailsResponse, *section_types: str) -> list[Mapping[str, Any]]:
    selected = []

    for section in response.sections:
        if "type" not in section:
            raise SectionContainsNoTypeError("section contains no type")

        section_type = section["type"]
        if not isinstance(section_type, str):
            raise ValueError(f"section type is not a string: {section_type!r}")

        if section_type in section_types:
            selected.append(section)

    if not selected:
        raise SectionTypeNotFoundError(f"section types {list(section_types)} were not found")

    return selected


class TransactionResponseNormalizer:
    """Normalizes transaction details: a header is required, the rest is optional."""

    def normalize(self, response: DetailsResponse) -> NormalizedResponse:
        """Sort the sections of the response by kind."""
        normalized = NormalizedResponse(id=response.id)
        normalized.header = self.section_type_header(response)

        try:
            tables = self.sections_type_table(response)
        except (LookupError, ValueError) as exc:
            logger.warning("could not deserialize table sections: %s", exc)
            tables = []

        for table in tables:
            if table.title == SECTION_TITLE_OVERVIEW:
                normalized.overview = table
            elif table.title == SECTION_TITLE_PERFORMANCE:
                normalized.performance = table
            elif table.title in (SECTION_TITLE_TRANSACTION, SECTION_TITLE_TRANSACTION_ALT):
                normalized.transaction = table
            elif table.title != SECTION_TITLE_SAVING_PLAN:
                logger.warning("unknown section title: %s", table.title)

        try:
            normalized.documents = self.section_type_documents(response)
        except (LookupError, ValueError) as exc:
            logger.debug("could not deserialize documents section: %s", exc)

        return normalized

    def section_type_header(self, response: DetailsResponse) -> HeaderSection:
        """Return the first header section."""
        sections = [
            HeaderSection.from_dict(section)
            for section in _select_sections(response, RESPONSE_SECTION_TYPE_VALUE_HEADER)
        ]
        return sections[0]

    def sections_type_table(self, response: DetailsResponse) -> list[TableSection]:
        """Return all table and horizontal table sections."""
        return [
            TableSection.from_dict(section)
            for section in _select_sections(
                response,
                RESPONSE_SECTION_TYPE_VALUE_TABLE,
                RESPONSE_SECTION_TYPE_VALUE_HORIZONTAL_TABLE,
            )
        ]

    def section_type_documents(self, response: DetailsResponse) -> DocumentsSection:
        """Return the first documents section."""
        sections = [
            DocumentsSection.from_dict(section)
            for section in _select_sections(response, RESPONSE_SECTION_TYPE_VALUE_DOCUMENTS)
        ]
        return sections[0]


class ActivityLogResponseNormalizer(TransactionResponseNormalizer):
    """Normalizes activity details: both header and documents are required."""

    def normalize(self, response: DetailsResponse) -> NormalizedResponse:
        """Extract the header and documents of the response."""
        return NormalizedResponse(
            id=response.id,
            header=self.section_type_header(response),
            documents=self.section_type_documents(response),
        )