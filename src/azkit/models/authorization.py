"""Microsoft Graph models surfaced by the authorization provider."""

from __future__ import annotations

from azkit.models._base import ExpandableEnum


class MicrosoftGraphOperationStatus(ExpandableEnum):
    NOT_STARTED = "NotStarted"
    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"
