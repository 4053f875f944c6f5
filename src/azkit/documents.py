"""Document Analysis (Form Recognizer) client."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import requests

from azkit._auth import COGNITIVE_SERVICES_SCOPE, _get_headers
from azkit._transport import send
from azkit.models.documents import AnalyzeResult, AnalyzeResultOperation
from azkit.polling import LROPoller
from azkit.settings import settings

logger = logging.getLogger(__name__)


def _analyze_result(body: dict) -> AnalyzeResult | None:
    return AnalyzeResultOperation.from_wire(body).analyze_result


class DocumentAnalysisClient:
    """Submit documents to a prebuilt or custom model and poll for the result.

    Authenticates with an ``Ocp-Apim-Subscription-Key`` when *api_key* is
    given, otherwise with an ``azure-identity`` token.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str | None = None,
        credential: object | None = None,
        polling_interval: float | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self._api_key = api_key
        self._credential = credential
        self._polling_interval = polling_interval

    def _headers(self) -> dict[str, str]:
        if self._api_key:
            return {"Ocp-Apim-Subscription-Key": self._api_key}
        return _get_headers(COGNITIVE_SERVICES_SCOPE, credential=self._credential)

    def _analyze_url(self, model_id: str) -> str:
        return f"{self.endpoint}/formrecognizer/documentModels/{model_id}:analyze"

    def _params(
        self, pages: str | None, locale: str | None, features: Sequence[str] | None
    ) -> dict:
        params = {"api-version": settings.documents_api_version}
        if pages:
            params["pages"] = pages
        if locale:
            params["locale"] = locale
        if features:
            params["features"] = ",".join(features)
        return params

    def _poller(self, resp: requests.Response, url: str) -> LROPoller[AnalyzeResult]:
        if not resp.headers.get("Operation-Location"):
            raise ValueError("Analyze response carries no Operation-Location header")
        return LROPoller(
            resp,
            method="POST",
            resource_url=url,
            headers=self._headers(),
            deserialize=_analyze_result,
            polling_interval=self._polling_interval,
        )

    def begin_analyze_document(
        self,
        model_id: str,
        document: bytes,
        *,
        content_type: str = "application/octet-stream",
        pages: str | None = None,
        locale: str | None = None,
        features: Sequence[str] | None = None,
    ) -> LROPoller[AnalyzeResult]:
        """Analyze *document* bytes; ``poller.result()`` is an :class:`AnalyzeResult`."""
        url = self._analyze_url(model_id)
        headers = {**self._headers(), "Content-Type": content_type}
        logger.info("Analyzing %s byte document with model %s", len(document), model_id)
        resp = send(
            "POST",
            url,
            params=self._params(pages, locale, features),
            headers=headers,
            data=document,
            expected=(202,),
        )
        return self._poller(resp, url)

    def begin_analyze_document_from_url(
        self,
        model_id: str,
        document_url: str,
        *,
        pages: str | None = None,
        locale: str | None = None,
        features: Sequence[str] | None = None,
    ) -> LROPoller[AnalyzeResult]:
        """Analyze a document the service downloads from *document_url*."""
        url = self._analyze_url(model_id)
        logger.info("Analyzing %s with model %s", document_url, model_id)
        resp = send(
            "POST",
            url,
            params=self._params(pages, locale, features),
            headers=self._headers(),
            json={"urlSource": document_url},
            expected=(202,),
        )
        return self._poller(resp, url)
