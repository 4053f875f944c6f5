"""Synapse artifact dataset models."""

from __future__ import annotations

from typing import Any

from azkit.models._base import RestModel, wire_field


class DatasetStorageFormat(RestModel):
    type: str | None = wire_field(required=True)
    serializer: Any = None
    deserializer: Any = None


class DatasetCompression(RestModel):
    type: str | None = wire_field(required=True)
    level: Any = None


class LinkedServiceReference(RestModel):
    type: str = "LinkedServiceReference"
    reference_name: str | None = wire_field(required=True)
    parameters: dict[str, Any] | None = None


class Dataset(RestModel):
    type: str | None = wire_field(required=True)
    description: str | None = None
    structure: Any = None
    schema_: Any = wire_field("schema")
    linked_service_name: LinkedServiceReference | None = wire_field(required=True)
    parameters: dict[str, Any] | None = None
    annotations: list[Any] | None = None


class AmazonS3Dataset(Dataset):
    """A single Amazon Simple Storage Service (S3) object or a set of S3 objects.

    ``typeProperties`` fields hold literal values or expression objects
    (``{"value": "...", "type": "Expression"}``), hence ``Any``.
    """

    type: str | None = "AmazonS3Object"
    bucket_name: Any = wire_field("typeProperties.bucketName", required=True)
    key: Any = wire_field("typeProperties.key")
    prefix: Any = wire_field("typeProperties.prefix")
    version: Any = wire_field("typeProperties.version")
    modified_datetime_start: Any = wire_field("typeProperties.modifiedDatetimeStart")
    modified_datetime_end: Any = wire_field("typeProperties.modifiedDatetimeEnd")
    format: DatasetStorageFormat | None = wire_field("typeProperties.format")
    compression: DatasetCompression | None = wire_field("typeProperties.compression")
