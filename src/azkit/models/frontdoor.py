"""Azure Front Door routing models.

A routing rule either forwards a request to a backend pool or redirects
it.  Which of the two a ``routeConfiguration`` is depends on its
``@odata.type``; values this module does not know deserialise to the base
:class:`RouteConfiguration`.
"""

from __future__ import annotations

from typing import Annotated, Any, Union

from pydantic import Discriminator, Tag

from azkit.models._base import ExpandableEnum, RestModel, wire_field
from azkit.models.arm import TrackedResource

ROUTE_CONFIGURATION = "RouteConfiguration"
FORWARDING_CONFIGURATION = "#Microsoft.Azure.FrontDoor.Models.FrontdoorForwardingConfiguration"
REDIRECT_CONFIGURATION = "#Microsoft.Azure.FrontDoor.Models.FrontdoorRedirectConfiguration"


class FrontDoorForwardingProtocol(ExpandableEnum):
    HTTP_ONLY = "HttpOnly"
    HTTPS_ONLY = "HttpsOnly"
    MATCH_REQUEST = "MatchRequest"


class FrontDoorRedirectType(ExpandableEnum):
    MOVED = "Moved"
    FOUND = "Found"
    TEMPORARY_REDIRECT = "TemporaryRedirect"
    PERMANENT_REDIRECT = "PermanentRedirect"


class FrontDoorRedirectProtocol(ExpandableEnum):
    HTTP_ONLY = "HttpOnly"
    HTTPS_ONLY = "HttpsOnly"
    MATCH_REQUEST = "MatchRequest"


class FrontDoorResourceState(ExpandableEnum):
    CREATING = "Creating"
    ENABLING = "Enabling"
    ENABLED = "Enabled"
    DISABLING = "Disabling"
    DISABLED = "Disabled"
    DELETING = "Deleting"


class SubResource(RestModel):
    """Reference to another resource by ID."""

    id: str | None = None


class RouteConfiguration(RestModel):
    """Base for the things a routing rule does with a matched request."""

    odata_type: str = wire_field("@odata.type", default=ROUTE_CONFIGURATION)


class ForwardingConfiguration(RouteConfiguration):
    odata_type: str = wire_field("@odata.type", default=FORWARDING_CONFIGURATION)
    custom_forwarding_path: str | None = None
    forwarding_protocol: FrontDoorForwardingProtocol | None = None
    backend_pool: SubResource | None = None


class RedirectConfiguration(RouteConfiguration):
    odata_type: str = wire_field("@odata.type", default=REDIRECT_CONFIGURATION)
    redirect_type: FrontDoorRedirectType | None = None
    redirect_protocol: FrontDoorRedirectProtocol | None = None
    custom_host: str | None = None
    custom_path: str | None = None
    custom_fragment: str | None = None
    custom_query_string: str | None = None


_ROUTE_CONFIGURATION_TAGS = {FORWARDING_CONFIGURATION, REDIRECT_CONFIGURATION}


def _route_configuration_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("@odata.type", value.get("odata_type"))
    else:
        kind = getattr(value, "odata_type", None)
    return kind if kind in _ROUTE_CONFIGURATION_TAGS else ROUTE_CONFIGURATION


AnyRouteConfiguration = Annotated[
    Union[
        Annotated[ForwardingConfiguration, Tag(FORWARDING_CONFIGURATION)],
        Annotated[RedirectConfiguration, Tag(REDIRECT_CONFIGURATION)],
        Annotated[RouteConfiguration, Tag(ROUTE_CONFIGURATION)],
    ],
    Discriminator(_route_configuration_tag),
]


class RoutingRule(RestModel):
    id: str | None = None
    name: str | None = None
    type: str | None = wire_field(read_only=True)
    frontend_endpoints: list[SubResource] | None = wire_field("properties.frontendEndpoints")
    accepted_protocols: list[str] | None = wire_field("properties.acceptedProtocols")
    patterns_to_match: list[str] | None = wire_field("properties.patternsToMatch")
    enabled_state: str | None = wire_field("properties.enabledState")
    route_configuration: AnyRouteConfiguration | None = wire_field(
        "properties.routeConfiguration"
    )
    resource_state: FrontDoorResourceState | None = wire_field(
        "properties.resourceState", read_only=True
    )


class FrontDoor(TrackedResource):
    friendly_name: str | None = wire_field("properties.friendlyName")
    routing_rules: list[RoutingRule] | None = wire_field("properties.routingRules")
    enabled_state: str | None = wire_field("properties.enabledState")
    provisioning_state: str | None = wire_field("properties.provisioningState", read_only=True)
    resource_state: FrontDoorResourceState | None = wire_field(
        "properties.resourceState", read_only=True
    )
