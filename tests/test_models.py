"""Tests for the wire models: deserialize / serialize and required-field checks."""

from datetime import UTC, datetime

import pytest

from azkit.models import (
    AmazonS3Dataset,
    AzureTableParameterPatch,
    BlobRequestConditions,
    BlockBlobItem,
    DocumentTable,
    DocumentTableCell,
    ErrorResponse,
    ForwardingConfiguration,
    FrontDoor,
    ManagedClusterUpdate,
    MicrosoftGraphOperationStatus,
    NotificationLevel,
    OperationalState,
    RedirectConfiguration,
    ResourceProviderOperationDisplay,
    RoleInstanceProperties,
    RouteConfiguration,
    RoutingRule,
    SnapshotCollection,
    SystemData,
    UpdateRun,
)
from azkit.models.fleet import UpdateState

# ---------------------------------------------------------------------------
# ARM common
# ---------------------------------------------------------------------------


class TestResourceProviderOperationDisplay:
    def test_deserialize(self) -> None:
        model = ResourceProviderOperationDisplay.from_wire(
            '{"provider":"mparcryuanzw","resource":"zdxtayrlhmwhf",'
            '"operation":"rqobmtuk","description":"ryrtihfxtijbpzv"}'
        )
        assert model.provider == "mparcryuanzw"
        assert model.resource == "zdxtayrlhmwhf"
        assert model.operation == "rqobmtuk"
        assert model.description == "ryrtihfxtijbpzv"

    def test_serialize(self) -> None:
        model = ResourceProviderOperationDisplay(provider="p", resource="r", operation="o")
        assert model.to_wire() == {"provider": "p", "resource": "r", "operation": "o"}


class TestSystemData:
    def test_dates_and_enum(self) -> None:
        model = SystemData.from_wire(
            {"createdBy": "me", "createdByType": "User", "createdAt": "2023-01-01T00:00:00Z"}
        )
        assert model.created_at == datetime(2023, 1, 1, tzinfo=UTC)
        assert model.created_by_type == "User"
        assert model.created_by_type.is_known


class TestErrorResponse:
    def test_nested_details(self) -> None:
        model = ErrorResponse.from_wire(
            {
                "error": {
                    "code": "InvalidTemplate",
                    "message": "bad",
                    "details": [{"code": "Inner", "message": "deeper"}],
                }
            }
        )
        assert model.error.code == "InvalidTemplate"
        assert model.error.details[0].code == "Inner"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TestExpandableEnum:
    def test_known_value_case_insensitive(self) -> None:
        value = MicrosoftGraphOperationStatus.from_value("running")
        assert value is MicrosoftGraphOperationStatus.RUNNING

    def test_unknown_value_kept(self) -> None:
        value = MicrosoftGraphOperationStatus.from_value("Paused")
        assert value == "Paused"
        assert not value.is_known
        assert isinstance(value, MicrosoftGraphOperationStatus)

    def test_values(self) -> None:
        assert MicrosoftGraphOperationStatus.values() == [
            "NotStarted",
            "Running",
            "Completed",
            "Failed",
        ]

    def test_unknown_value_survives_round_trip(self) -> None:
        model = RoleInstanceProperties.from_wire({"operationalState": "Hibernating"})
        assert model.operational_state == "Hibernating"
        assert not model.operational_state.is_known
        assert model.to_wire() == {"operationalState": "Hibernating"}


class TestNotificationLevel:
    def test_from_value(self) -> None:
        assert NotificationLevel("NonUrgentSuggestion") is NotificationLevel.NON_URGENT_SUGGESTION

    def test_unknown_rejected(self) -> None:
        with pytest.raises(ValueError):
            NotificationLevel("Catastrophic")


# ---------------------------------------------------------------------------
# Resource models
# ---------------------------------------------------------------------------


class TestRoleInstanceProperties:
    def test_deserialize(self) -> None:
        model = RoleInstanceProperties.from_wire(
            '{"provisioningState":"Failed","operationalState":"Running"}'
        )
        assert model.operational_state == OperationalState.RUNNING
        assert model.provisioning_state == "Failed"

    def test_serialize_omits_read_only(self) -> None:
        model = RoleInstanceProperties(
            operational_state=OperationalState.RUNNING, provisioning_state="Failed"
        )
        assert model.to_wire() == {"operationalState": "Running"}


UPDATE_RUN_WIRE = {
    "id": "/subscriptions/s/resourceGroups/rg/providers/Microsoft.ContainerService/fleets/f/updateRuns/run1",
    "name": "run1",
    "type": "Microsoft.ContainerService/fleets/updateRuns",
    "eTag": '"0x1"',
    "systemData": {"createdBy": "someone", "createdByType": "User"},
    "properties": {
        "provisioningState": "Succeeded",
        "strategy": {
            "stages": [
                {"name": "canary", "groups": [{"name": "g1"}], "afterStageWaitInSeconds": 60}
            ]
        },
        "managedClusterUpdate": {
            "upgrade": {"type": "Full", "kubernetesVersion": "1.27.3"}
        },
        "status": {"status": {"state": "Completed"}},
    },
}


class TestUpdateRun:
    def test_deserialize_flattens_properties(self) -> None:
        run = UpdateRun.from_wire(UPDATE_RUN_WIRE)
        assert run.name == "run1"
        assert run.etag == '"0x1"'
        assert run.provisioning_state == "Succeeded"
        assert run.strategy.stages[0].groups[0].name == "g1"
        assert run.strategy.stages[0].after_stage_wait_in_seconds == 60
        assert run.managed_cluster_update.upgrade.kubernetes_version == "1.27.3"
        assert run.status.status.state == UpdateState.COMPLETED
        assert run.system_data.created_by == "someone"

    def test_serialize_nests_properties_and_drops_read_only(self) -> None:
        run = UpdateRun.from_wire(UPDATE_RUN_WIRE)
        assert run.to_wire() == {
            "properties": {
                "strategy": {
                    "stages": [
                        {
                            "name": "canary",
                            "groups": [{"name": "g1"}],
                            "afterStageWaitInSeconds": 60,
                        }
                    ]
                },
                "managedClusterUpdate": {
                    "upgrade": {"type": "Full", "kubernetesVersion": "1.27.3"}
                },
            }
        }

    def test_validate_required_reports_nested_path(self) -> None:
        run = UpdateRun(managed_cluster_update=ManagedClusterUpdate())
        with pytest.raises(ValueError, match=r"properties\.managedClusterUpdate\.upgrade"):
            run.validate_required()

    def test_validate_required_passes(self) -> None:
        UpdateRun.from_wire(UPDATE_RUN_WIRE).validate_required()


class TestSnapshotCollection:
    def test_deserialize(self) -> None:
        page = SnapshotCollection.from_wire(
            {
                "value": [{"id": "/snap/1", "kind": "k", "properties": {"time": "2023-05-01"}}],
                "nextLink": "https://next",
            }
        )
        assert page.next_link == "https://next"
        assert page.value[0].time == "2023-05-01"

    def test_serialize(self) -> None:
        page = SnapshotCollection.from_wire(
            {"value": [{"id": "/snap/1", "kind": "k"}], "nextLink": "https://next"}
        )
        assert page.to_wire() == {"value": [{"kind": "k"}]}

    def test_value_required(self) -> None:
        with pytest.raises(ValueError, match="value"):
            SnapshotCollection().validate_required()


class TestAzureTableParameterPatch:
    def test_all_optional(self) -> None:
        patch_model = AzureTableParameterPatch()
        patch_model.validate_required()
        assert patch_model.to_wire() == {}

    def test_serialize(self) -> None:
        patch_model = AzureTableParameterPatch(connection_string="cs", table="t")
        assert patch_model.to_wire() == {"connectionString": "cs", "table": "t"}


class TestAmazonS3Dataset:
    WIRE = {
        "type": "AmazonS3Object",
        "linkedServiceName": {"referenceName": "s3", "type": "LinkedServiceReference"},
        "typeProperties": {
            "bucketName": "bucket",
            "key": {"value": "@dataset().key", "type": "Expression"},
            "format": {"type": "ParquetFormat"},
        },
    }

    def test_deserialize(self) -> None:
        ds = AmazonS3Dataset.from_wire(self.WIRE)
        assert ds.bucket_name == "bucket"
        assert ds.key == {"value": "@dataset().key", "type": "Expression"}
        assert ds.format.type == "ParquetFormat"
        assert ds.linked_service_name.reference_name == "s3"

    def test_serialize(self) -> None:
        assert AmazonS3Dataset.from_wire(self.WIRE).to_wire() == self.WIRE

    def test_required(self) -> None:
        with pytest.raises(ValueError) as excinfo:
            AmazonS3Dataset().validate_required()
        assert "typeProperties.bucketName" in str(excinfo.value)
        assert "linkedServiceName" in str(excinfo.value)


# ---------------------------------------------------------------------------
# Front Door routing
# ---------------------------------------------------------------------------

FORWARDING = "#Microsoft.Azure.FrontDoor.Models.FrontdoorForwardingConfiguration"
REDIRECT = "#Microsoft.Azure.FrontDoor.Models.FrontdoorRedirectConfiguration"

FRONT_DOOR_WIRE = {
    "id": "/subscriptions/s/resourceGroups/rg/providers/Microsoft.Network/frontDoors/fd1",
    "name": "fd1",
    "type": "Microsoft.Network/frontDoors",
    "location": "global",
    "tags": {"env": "prod"},
    "properties": {
        "friendlyName": "edge",
        "provisioningState": "Succeeded",
        "resourceState": "Enabled",
        "routingRules": [
            {
                "name": "forward",
                "properties": {
                    "acceptedProtocols": ["Https"],
                    "patternsToMatch": ["/*"],
                    "routeConfiguration": {
                        "@odata.type": FORWARDING,
                        "forwardingProtocol": "HttpsOnly",
                        "backendPool": {"id": "/pools/p1"},
                    },
                },
            },
            {
                "name": "redirect",
                "properties": {
                    "routeConfiguration": {
                        "@odata.type": REDIRECT,
                        "redirectType": "Moved",
                        "customHost": "example.org",
                    },
                },
            },
        ],
    },
}


class TestRouteConfiguration:
    def test_deserialize_base(self) -> None:
        model = RouteConfiguration.from_wire('{"@odata.type":"RouteConfiguration"}')
        assert model.odata_type == "RouteConfiguration"

    def test_serialize_base(self) -> None:
        model = RouteConfiguration.from_wire(RouteConfiguration().to_wire())
        assert model.to_wire() == {"@odata.type": "RouteConfiguration"}

    def test_discriminator_selects_subtype(self) -> None:
        door = FrontDoor.from_wire(FRONT_DOOR_WIRE)
        forward, redirect = (rule.route_configuration for rule in door.routing_rules)
        assert isinstance(forward, ForwardingConfiguration)
        assert forward.forwarding_protocol == "HttpsOnly"
        assert forward.backend_pool.id == "/pools/p1"
        assert isinstance(redirect, RedirectConfiguration)
        assert redirect.custom_host == "example.org"

    def test_unknown_odata_type_falls_back_to_base(self) -> None:
        rule = RoutingRule.from_wire(
            {"properties": {"routeConfiguration": {"@odata.type": "#Future.Configuration"}}}
        )
        assert type(rule.route_configuration) is RouteConfiguration
        assert rule.route_configuration.odata_type == "#Future.Configuration"

    def test_serialize_keeps_discriminator(self) -> None:
        rule = RoutingRule(
            name="r",
            route_configuration=RedirectConfiguration(redirect_type="Found"),
        )
        assert rule.to_wire() == {
            "name": "r",
            "properties": {
                "routeConfiguration": {"@odata.type": REDIRECT, "redirectType": "Found"}
            },
        }


class TestFrontDoor:
    def test_round_trip_drops_read_only(self) -> None:
        door = FrontDoor.from_wire(FRONT_DOOR_WIRE)
        assert door.provisioning_state == "Succeeded"
        wire = door.to_wire()
        assert wire["location"] == "global"
        assert "id" not in wire
        assert "provisioningState" not in wire["properties"]
        assert "resourceState" not in wire["properties"]
        assert wire["properties"]["routingRules"][0]["properties"]["routeConfiguration"] == {
            "@odata.type": FORWARDING,
            "forwardingProtocol": "HttpsOnly",
            "backendPool": {"id": "/pools/p1"},
        }

    def test_location_required(self) -> None:
        with pytest.raises(ValueError, match="location"):
            FrontDoor(friendly_name="edge").validate_required()


# ---------------------------------------------------------------------------
# Document tables
# ---------------------------------------------------------------------------


def _cell(row: int, col: int, content: str, **kwargs: int) -> DocumentTableCell:
    return DocumentTableCell(
        row_index=row, column_index=col, content=content, spans=[], **kwargs
    )


class TestDocumentTable:
    def test_deserialize(self) -> None:
        table = DocumentTable.from_wire(
            {
                "rowCount": 1,
                "columnCount": 2,
                "cells": [
                    {
                        "kind": "columnHeader",
                        "rowIndex": 0,
                        "columnIndex": 0,
                        "content": "Name",
                        "spans": [{"offset": 0, "length": 4}],
                    }
                ],
                "boundingRegions": [{"pageNumber": 1, "polygon": [0, 0, 1, 0, 1, 1, 0, 1]}],
                "spans": [{"offset": 0, "length": 4}],
            }
        )
        assert table.cells[0].kind == "columnHeader"
        assert table.bounding_regions[0].page_number == 1
        assert table.spans[0].length == 4

    def test_required(self) -> None:
        with pytest.raises(ValueError, match="columnCount, cells, spans"):
            DocumentTable(row_count=1).validate_required()

    def test_required_in_list_items(self) -> None:
        cell = DocumentTableCell(row_index=0, column_index=0, content="a")
        table = DocumentTable(row_count=1, column_count=1, cells=[cell], spans=[])
        with pytest.raises(ValueError, match=r"cells\[0\]\.spans"):
            table.validate_required()

    def test_to_rows_honours_spans(self) -> None:
        table = DocumentTable(
            row_count=3,
            column_count=2,
            cells=[
                _cell(0, 0, "header", column_span=2),
                _cell(1, 0, "tall", row_span=2),
                _cell(1, 1, "b"),
            ],
            spans=[],
        )
        assert table.to_rows() == [
            ["header", "header"],
            ["tall", "b"],
            ["tall", None],
        ]


# ---------------------------------------------------------------------------
# Blob header models
# ---------------------------------------------------------------------------


class TestBlobRequestConditions:
    def test_to_headers(self) -> None:
        conditions = BlobRequestConditions(
            if_match='"etag"',
            if_unmodified_since=datetime(2023, 1, 1, tzinfo=UTC),
            tags_conditions="\"tag\" = 'a'",
            lease_id="lease",
        )
        assert conditions.to_headers() == {
            "If-Match": '"etag"',
            "If-Unmodified-Since": "Sun, 01 Jan 2023 00:00:00 GMT",
            "x-ms-if-tags": "\"tag\" = 'a'",
            "x-ms-lease-id": "lease",
        }

    def test_empty(self) -> None:
        assert BlobRequestConditions().to_headers() == {}


class TestBlockBlobItem:
    def test_from_headers(self) -> None:
        item = BlockBlobItem.from_headers(
            {
                "ETag": '"0x8D"',
                "Last-Modified": "Sun, 01 Jan 2023 00:00:00 GMT",
                "Content-MD5": "AAECAw==",
                "x-ms-request-server-encrypted": "true",
                "x-ms-version-id": "v1",
            }
        )
        assert item.etag == '"0x8D"'
        assert item.last_modified == datetime(2023, 1, 1, tzinfo=UTC)
        assert item.content_md5 == b"\x00\x01\x02\x03"
        assert item.is_server_encrypted is True
        assert item.version_id == "v1"
