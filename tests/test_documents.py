"""Tests for the Document Analysis client."""

import pytest

from azkit.documents import DocumentAnalysisClient
from azkit.exceptions import OperationFailedError
from azkit.models import AnalyzeResult
from azkit.settings import settings

ENDPOINT = "https://doc.cognitiveservices.azure.com/"
OPERATION_URL = (
    "https://doc.cognitiveservices.azure.com/formrecognizer/documentModels/"
    "prebuilt-layout/analyzeResults/abc?api-version=2023-07-31"
)


def _cell(row: int, col: int, content: str, **extra: str) -> dict:
    return {"rowIndex": row, "columnIndex": col, "content": content, "spans": [], **extra}


SUCCEEDED_BODY = {
    "status": "succeeded",
    "createdDateTime": "2023-08-01T10:00:00Z",
    "lastUpdatedDateTime": "2023-08-01T10:00:05Z",
    "analyzeResult": {
        "apiVersion": "2023-07-31",
        "modelId": "prebuilt-layout",
        "content": "Name Qty\nApple 3",
        "pages": [{"pageNumber": 1, "spans": [{"offset": 0, "length": 16}]}],
        "tables": [
            {
                "rowCount": 2,
                "columnCount": 2,
                "cells": [
                    _cell(0, 0, "Name", kind="columnHeader"),
                    _cell(0, 1, "Qty", kind="columnHeader"),
                    _cell(1, 0, "Apple"),
                    _cell(1, 1, "3"),
                ],
                "spans": [{"offset": 0, "length": 16}],
            }
        ],
    },
}


@pytest.fixture()
def accepted(make_response):
    return make_response(202, headers={"Operation-Location": OPERATION_URL, "Retry-After": "1"})


class TestAnalyzeDocument:
    def test_analyze_bytes(self, http, make_response, accepted) -> None:
        http.side_effect = [
            accepted,
            make_response(200, json_body={"status": "running"}),
            make_response(200, json_body=SUCCEEDED_BODY),
        ]
        client = DocumentAnalysisClient(ENDPOINT, api_key="secret")
        poller = client.begin_analyze_document(
            "prebuilt-layout", b"%PDF-1.7", content_type="application/pdf", pages="1-2"
        )
        result = poller.result()

        assert isinstance(result, AnalyzeResult)
        assert result.model_id == "prebuilt-layout"
        assert result.tables[0].to_rows() == [["Name", "Qty"], ["Apple", "3"]]

        post = http.call_args_list[0]
        assert post.args == (
            "POST",
            "https://doc.cognitiveservices.azure.com/formrecognizer/documentModels/"
            "prebuilt-layout:analyze",
        )
        assert post.kwargs["params"] == {
            "api-version": settings.documents_api_version,
            "pages": "1-2",
        }
        assert post.kwargs["headers"]["Ocp-Apim-Subscription-Key"] == "secret"
        assert post.kwargs["headers"]["Content-Type"] == "application/pdf"
        assert post.kwargs["data"] == b"%PDF-1.7"

        poll = http.call_args_list[1]
        assert poll.args == ("GET", OPERATION_URL)
        assert "Content-Type" not in poll.kwargs["headers"]

    def test_analyze_url_uses_token(self, http, make_response, accepted, _mock_credential) -> None:
        http.side_effect = [accepted, make_response(200, json_body=SUCCEEDED_BODY)]
        client = DocumentAnalysisClient(ENDPOINT)
        client.begin_analyze_document_from_url(
            "prebuilt-layout", "https://example.com/doc.pdf", features=["ocrHighResolution"]
        ).result()
        post = http.call_args_list[0]
        assert post.kwargs["json"] == {"urlSource": "https://example.com/doc.pdf"}
        assert post.kwargs["params"]["features"] == "ocrHighResolution"
        assert post.kwargs["headers"]["Authorization"] == "Bearer fake-token"
        _mock_credential.get_token.assert_called_with(
            "https://cognitiveservices.azure.com/.default"
        )

    def test_failed_analysis(self, http, make_response, accepted) -> None:
        http.side_effect = [
            accepted,
            make_response(
                200,
                json_body={
                    "status": "failed",
                    "createdDateTime": "2023-08-01T10:00:00Z",
                    "lastUpdatedDateTime": "2023-08-01T10:00:05Z",
                    "error": {"code": "InvalidContent", "message": "corrupted file"},
                },
            ),
        ]
        poller = DocumentAnalysisClient(ENDPOINT, api_key="k").begin_analyze_document(
            "prebuilt-read", b"x"
        )
        with pytest.raises(OperationFailedError, match="corrupted file"):
            poller.result()

    def test_missing_operation_location(self, http, make_response) -> None:
        http.return_value = make_response(202)
        with pytest.raises(ValueError, match="Operation-Location"):
            DocumentAnalysisClient(ENDPOINT, api_key="k").begin_analyze_document(
                "prebuilt-read", b"x"
            )
