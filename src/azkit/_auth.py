"""Authentication helpers for Azure REST calls."""

from __future__ import annotations

import logging

from azure.identity import DefaultAzureCredential

from azkit.settings import settings

logger = logging.getLogger(__name__)

STORAGE_SCOPE = "https://storage.azure.com/.default"
COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"

_credential: DefaultAzureCredential | None = None


def management_scope() -> str:
    return f"{settings.management_url}/.default"


def get_credential() -> DefaultAzureCredential:
    """Return the process-wide credential, creating it on first use."""
    global _credential
    if _credential is None:
        logger.debug("Creating DefaultAzureCredential")
        _credential = DefaultAzureCredential()
    return _credential


def _get_headers(
    scope: str | None = None,
    tenant_id: str | None = None,
    credential: object | None = None,
) -> dict[str, str]:
    """Return an ``Authorization`` header for *scope*.

    When *tenant_id* is provided the token is scoped to that tenant.  An
    explicit *credential* (anything with ``get_token``) overrides the default.
    """
    kwargs: dict[str, str] = {}
    if tenant_id:
        kwargs["tenant_id"] = tenant_id
    cred = credential if credential is not None else get_credential()
    token = cred.get_token(scope or management_scope(), **kwargs)  # type: ignore[attr-defined]
    return {"Authorization": f"Bearer {token.token}"}

