"""Activity log timeline: items and the client that lists them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from trportfolio.constants import RESPONSE_ACTION_TYPE_TIMELINE_DETAIL
from trportfolio.wsclient import WSClient, WSClientError

REQUEST_DATA_TYPE = "timelineActivityLog"


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} is not a string: {value!r}")
    return value


@dataclass
class ActivityLogItemAction:
    """Action attached to an activity; its payload may be of any JSON type."""

    payload: Any = None
    type: str = ""

    def payload_str(self) -> str:
        """The payload if it is a string, else an empty string."""
        return self.payload if isinstance(self.payload, str) else ""

    def has_details(self) -> bool:
        """Whether details of the activity can be fetched."""
        return self.type == RESPONSE_ACTION_TYPE_TIMELINE_DETAIL and self.payload_str() != ""


@dataclass
class ActivityLogItem:
    """One entry of the activity log."""

    action: ActivityLogItemAction = field(default_factory=ActivityLogItemAction)
    event_type: str = ""
    icon: str = ""
    id: str = ""
    subtitle: str = ""
    timestamp: str = ""
    title: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ActivityLogItem:
        """Build an item from its decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ValueError(f"activity log item is not an object: {data!r}")

        action_data = data.get("action") or {}
        if not isinstance(action_data, Mapping):
            raise ValueError(f"action is not an object: {action_data!r}")

        return cls(
            action=ActivityLogItemAction(
                payload=action_data.get("payload"),
                type=_str(action_data, "type"),
            ),
            event_type=_str(data, "eventType"),
            icon=_str(data, "icon"),
            id=_str(data, "id"),
            subtitle=_str(data, "subtitle"),
            timestamp=_str(data, "timestamp"),
            title=_str(data, "title"),
        )


class ActivityLogClient:
    """Lists all activity log items."""

    def __init__(self, reader: Any) -> None:
        self._client = WSClient(REQUEST_DATA_TYPE, reader)

    def items(self) -> list[ActivityLogItem]:
        """Fetch all pages of the activity log."""
        raw_items = self._client.list()
        try:
            return [ActivityLogItem.from_dict(item) for item in raw_items]
        except ValueError as exc:
            raise WSClientError(f"could not unmarshal {REQUEST_DATA_TYPE} list response: {exc}") from exc