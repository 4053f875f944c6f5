"""Kubernetes Fleet update run models.

An update run upgrades the member clusters of a fleet stage by stage; the
``properties`` envelope of the wire format is flattened onto
:class:`UpdateRun`.
"""

from __future__ import annotations

from datetime import datetime

from azkit.models._base import ExpandableEnum, RestModel, wire_field
from azkit.models.arm import ErrorDetail, ProxyResource


class UpdateRunProvisioningState(ExpandableEnum):
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CANCELED = "Canceled"


class UpdateState(ExpandableEnum):
    NOT_STARTED = "NotStarted"
    RUNNING = "Running"
    STOPPING = "Stopping"
    STOPPED = "Stopped"
    SKIPPED = "Skipped"
    FAILED = "Failed"
    COMPLETED = "Completed"


class ManagedClusterUpgradeType(ExpandableEnum):
    FULL = "Full"
    CONTROL_PLANE_ONLY = "ControlPlaneOnly"


class UpdateGroup(RestModel):
    name: str | None = wire_field(required=True)


class UpdateStage(RestModel):
    name: str | None = wire_field(required=True)
    groups: list[UpdateGroup] | None = None
    after_stage_wait_in_seconds: int | None = None


class UpdateRunStrategy(RestModel):
    """Stages are run sequentially; groups within a stage run in parallel."""

    stages: list[UpdateStage] | None = wire_field(required=True)


class ManagedClusterUpgradeSpec(RestModel):
    type: ManagedClusterUpgradeType | None = wire_field(required=True)
    kubernetes_version: str | None = None


class ManagedClusterUpdate(RestModel):
    upgrade: ManagedClusterUpgradeSpec | None = wire_field(required=True)


class UpdateStatus(RestModel):
    start_time: datetime | None = wire_field(read_only=True)
    completed_time: datetime | None = wire_field(read_only=True)
    state: UpdateState | None = wire_field(read_only=True)
    error: ErrorDetail | None = wire_field(read_only=True)


class UpdateRunStatus(RestModel):
    status: UpdateStatus | None = wire_field(read_only=True)


class UpdateRun(ProxyResource):
    etag: str | None = wire_field("eTag", read_only=True)
    provisioning_state: UpdateRunProvisioningState | None = wire_field(
        "properties.provisioningState", read_only=True
    )
    strategy: UpdateRunStrategy | None = wire_field("properties.strategy")
    managed_cluster_update: ManagedClusterUpdate | None = wire_field(
        "properties.managedClusterUpdate"
    )
    status: UpdateRunStatus | None = wire_field("properties.status", read_only=True)
