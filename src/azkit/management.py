"""Generic Azure Resource Manager (control-plane) client.

Resources are addressed by their full ARM ID, so a single client covers
every resource provider.  Typed bodies are :class:`~azkit.models.RestModel`
instances; results come back as plain dicts unless a model class is given.
"""

from __future__ import annotations

import logging
from typing import TypeVar
from urllib.parse import quote

from azkit._auth import _get_headers, management_scope
from azkit._pagination import _paginate
from azkit._transport import send
from azkit.models import Operation, RestModel
from azkit.polling import LROPoller
from azkit.settings import settings

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=RestModel)


def resource_id(
    subscription_id: str,
    resource_group: str | None = None,
    provider: str | None = None,
    *type_name_pairs: str,
) -> str:
    """Build an ARM resource ID.

    ``resource_id("sub", "rg", "Microsoft.NetworkCloud", "defaultCniNetworks", "net1")``
    gives
    ``/subscriptions/sub/resourceGroups/rg/providers/Microsoft.NetworkCloud/defaultCniNetworks/net1``.
    """
    if len(type_name_pairs) % 2:
        raise ValueError("type_name_pairs must alternate resource type and name")
    parts = ["", "subscriptions", subscription_id]
    if resource_group:
        parts += ["resourceGroups", resource_group]
    if provider:
        parts += ["providers", provider]
    parts += [quote(p, safe="") for p in type_name_pairs]
    return "/".join(parts)


class ResourceManagementClient:
    """Issue generic ARM verbs against resource IDs."""

    def __init__(self, tenant_id: str | None = None, credential: object | None = None) -> None:
        self.tenant_id = tenant_id
        self._credential = credential
        self.base_url = settings.management_url

    def _headers(self) -> dict[str, str]:
        headers = _get_headers(management_scope(), self.tenant_id, self._credential)
        headers["Content-Type"] = "application/json"
        return headers

    def _url(self, path: str, api_version: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        sep = "&" if "?" in path else "?"
        return f"{self.base_url}{path}{sep}api-version={api_version}"

    def get(
        self, resource_id: str, api_version: str, model: type[M] | None = None
    ) -> dict | M:
        """GET a single resource."""
        body = send("GET", self._url(resource_id, api_version), headers=self._headers()).json()
        return model.from_wire(body) if model else body

    def list(self, collection_path: str, api_version: str) -> list[dict]:
        """Return every item of a collection, following ``nextLink`` pages."""
        return _paginate(self._url(collection_path, api_version), self._headers())

    def list_operations(self, provider: str, api_version: str) -> list[Operation]:
        """List the operations a resource provider exposes."""
        items = self.list(f"/providers/{provider}/operations", api_version)
        return [Operation.from_wire(item) for item in items]

    def begin_create_or_update(
        self,
        resource_id: str,
        body: RestModel | dict,
        api_version: str,
        model: type[M] | None = None,
    ) -> LROPoller:
        """PUT a resource and return a poller for its provisioning."""
        if isinstance(body, RestModel):
            body.validate_required()
            payload = body.to_wire()
        else:
            payload = body
        url = self._url(resource_id, api_version)
        headers = self._headers()
        logger.info("PUT %s", resource_id)
        resp = send("PUT", url, headers=headers, json=payload, expected=(200, 201, 202))
        return LROPoller(
            resp,
            method="PUT",
            resource_url=url,
            headers=headers,
            deserialize=model.from_wire if model else None,
        )

    def create_or_update(
        self,
        resource_id: str,
        body: RestModel | dict,
        api_version: str,
        model: type[M] | None = None,
    ) -> dict | M | None:
        return self.begin_create_or_update(resource_id, body, api_version, model).result()

    def begin_delete(self, resource_id: str, api_version: str) -> LROPoller:
        """DELETE a resource and return a poller for the deletion."""
        url = self._url(resource_id, api_version)
        headers = self._headers()
        logger.info("DELETE %s", resource_id)
        resp = send("DELETE", url, headers=headers, expected=(200, 202, 204))
        return LROPoller(resp, method="DELETE", resource_url=url, headers=headers)

    def delete(self, resource_id: str, api_version: str, timeout: float | None = None) -> None:
        self.begin_delete(resource_id, api_version).result(timeout)
