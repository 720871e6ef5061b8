"""Firestore REST API client."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from doc_cache_core.constants import (
    FIRESTORE_BASE_URL,
    FIRESTORE_DEFAULT_DATABASE,
    HTTP_STATUS_ERROR_CODES,
)
from doc_cache_core.exceptions import DocumentFetchError
from doc_cache_core.models.cache_entry import DocumentData
from doc_cache_core.models.snapshot import DocumentSnapshot

logger = structlog.get_logger()


def _status_to_code(status: str) -> str:
    """Convert a gRPC status name (PERMISSION_DENIED) to SDK form (permission-denied)."""
    return status.lower().replace("_", "-")


def decode_value(value: dict[str, Any]) -> Any:  # noqa: ANN401
    """Decode one typed Firestore value into a JSON-compatible Python value."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        return value["timestampValue"]
    if "referenceValue" in value:
        return value["referenceValue"]
    if "bytesValue" in value:
        # Base64 on the wire; kept as-is so payloads stay JSON-serializable
        return value["bytesValue"]
    if "geoPointValue" in value:
        point = value["geoPointValue"]
        return {
            "latitude": float(point.get("latitude", 0.0)),
            "longitude": float(point.get("longitude", 0.0)),
        }
    if "arrayValue" in value:
        return [decode_value(item) for item in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    msg = f"Unsupported Firestore value: {sorted(value)}"
    raise ValueError(msg)


def decode_fields(fields: dict[str, dict[str, Any]]) -> DocumentData:
    """Decode a Firestore ``fields`` map into a plain dict."""
    return {name: decode_value(value) for name, value in fields.items()}


def _error_from_response(path: str, response: httpx.Response) -> DocumentFetchError:
    """Build a DocumentFetchError from a non-success REST response."""
    code = HTTP_STATUS_ERROR_CODES.get(response.status_code, "unknown")
    message = response.reason_phrase or f"HTTP {response.status_code}"
    try:
        error = response.json().get("error", {})
    except ValueError:
        error = {}
    if isinstance(error, dict):
        if error.get("status"):
            code = _status_to_code(str(error["status"]))
        message = str(error.get("message") or message)
    return DocumentFetchError(f"Fetching {path!r} failed: {message}", code=code)


class FirestoreRestClient:
    """Single-document reads through the Firestore REST API."""

    def __init__(
        self,
        project_id: str,
        *,
        database: str = FIRESTORE_DEFAULT_DATABASE,
        base_url: str = FIRESTORE_BASE_URL,
        api_key: str | None = None,
        access_token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize with project coordinates and optional credentials."""
        self._documents_url = (
            f"{base_url.rstrip('/')}/projects/{project_id}/databases/{database}/documents"
        )
        self._api_key = api_key
        self._access_token = access_token
        self._timeout = timeout
        self._transport = transport

    def _document_url(self, path: str) -> str:
        """Build the REST URL for a document path, validating its shape."""
        segments = [segment for segment in path.strip("/").split("/") if segment]
        if not segments or len(segments) % 2:
            raise DocumentFetchError(
                f"Invalid document path {path!r}: expected collection/document pairs",
                code="invalid-argument",
            )
        return f"{self._documents_url}/{'/'.join(quote(s, safe='') for s in segments)}"

    async def fetch_by_path(self, path: str) -> DocumentSnapshot:
        """Fetch the document at path."""
        url = self._document_url(path)
        params = {"key": self._api_key} if self._api_key else None
        headers = (
            {"Authorization": f"Bearer {self._access_token}"} if self._access_token else None
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            raise DocumentFetchError(
                f"Fetching {path!r} timed out", code="deadline-exceeded"
            ) from exc
        except httpx.TransportError as exc:
            raise DocumentFetchError(
                f"Fetching {path!r} failed: {exc}", code="unavailable"
            ) from exc

        if response.status_code == 404:
            logger.debug("firestore_document_missing", path=path)
            return DocumentSnapshot(path=path, exists=False)
        if response.is_error:
            raise _error_from_response(path, response)

        body = response.json()
        logger.debug("firestore_document_fetched", path=path)
        return DocumentSnapshot(
            path=path,
            exists=True,
            payload=decode_fields(body.get("fields", {})),
            update_time=body.get("updateTime"),
        )
