"""Metrics Advisor data feed parameter models."""

from __future__ import annotations

from azkit.models._base import RestModel


class AzureTableParameterPatch(RestModel):
    """Partial update of an Azure Table data feed; every field is optional."""

    connection_string: str | None = None
    table: str | None = None
    query: str | None = None
