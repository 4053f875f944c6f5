"""Hybrid network function role instance models."""

from __future__ import annotations

from azkit.models._base import ExpandableEnum, RestModel, wire_field


class OperationalState(ExpandableEnum):
    UNKNOWN = "Unknown"
    STOPPED = "Stopped"
    RUNNING = "Running"
    STOPPING = "Stopping"
    STARTING = "Starting"


class ProvisioningState(ExpandableEnum):
    UNKNOWN = "Unknown"
    SUCCEEDED = "Succeeded"
    ACCEPTED = "Accepted"
    DELETING = "Deleting"
    FAILED = "Failed"
    CANCELED = "Canceled"
    DELETED = "Deleted"


class RoleInstanceProperties(RestModel):
    provisioning_state: ProvisioningState | None = wire_field(read_only=True)
    operational_state: OperationalState | None = None
