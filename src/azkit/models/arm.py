"""Common Azure Resource Manager envelope models."""

from __future__ import annotations

from datetime import datetime

from azkit.models._base import ExpandableEnum, RestModel, wire_field


class CreatedByType(ExpandableEnum):
    USER = "User"
    APPLICATION = "Application"
    MANAGED_IDENTITY = "ManagedIdentity"
    KEY = "Key"


class SystemData(RestModel):
    created_by: str | None = None
    created_by_type: CreatedByType | None = None
    created_at: datetime | None = None
    last_modified_by: str | None = None
    last_modified_by_type: CreatedByType | None = None
    last_modified_at: datetime | None = None


class Resource(RestModel):
    """Fields every ARM resource carries.  All are set by the service."""

    id: str | None = wire_field(read_only=True)
    name: str | None = wire_field(read_only=True)
    type: str | None = wire_field(read_only=True)
    system_data: SystemData | None = wire_field(read_only=True)


class ProxyResource(Resource):
    """A resource without ``location`` or ``tags``."""


class TrackedResource(Resource):
    location: str | None = wire_field(required=True)
    tags: dict[str, str] | None = None


class OperationDisplay(RestModel):
    """Localized display information for a resource provider operation."""

    provider: str | None = None
    resource: str | None = None
    operation: str | None = None
    description: str | None = None


# Name used by the desktop virtualization provider for the same schema.
ResourceProviderOperationDisplay = OperationDisplay


class Operation(RestModel):
    name: str | None = wire_field(read_only=True)
    is_data_action: bool | None = wire_field(read_only=True)
    display: OperationDisplay | None = None
    origin: str | None = wire_field(read_only=True)


class ErrorDetail(RestModel):
    code: str | None = None
    message: str | None = None
    target: str | None = None
    details: list[ErrorDetail] | None = None


class ErrorResponse(RestModel):
    error: ErrorDetail | None = None
