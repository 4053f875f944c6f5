"""App Service diagnostic snapshot models."""

from __future__ import annotations

from enum import StrEnum

from azkit.models._base import RestModel, wire_field
from azkit.models.arm import ProxyResource


class NotificationLevel(StrEnum):
    """Level indicating how critical a recommendation can impact a site."""

    CRITICAL = "Critical"
    WARNING = "Warning"
    INFORMATION = "Information"
    NON_URGENT_SUGGESTION = "NonUrgentSuggestion"


class Snapshot(ProxyResource):
    kind: str | None = None
    time: str | None = wire_field("properties.time", read_only=True)


class SnapshotCollection(RestModel):
    """A page of snapshots."""

    value: list[Snapshot] | None = wire_field(required=True)
    next_link: str | None = wire_field(read_only=True)
