"""Shared constants for doc-cache."""

from __future__ import annotations

# Retry defaults
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_MS = 0.0

NON_RETRYABLE_MESSAGE = (
    "Document store raised an error but its code was not in the retry allow-list"
)

# Every document entry lives under this prefix in the key-value store
DEFAULT_CACHE_NAMESPACE = "doc_cache:docs"

# Firestore REST API
FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"
FIRESTORE_DEFAULT_DATABASE = "(default)"

# gRPC-style status names as returned in REST error bodies, by HTTP status
HTTP_STATUS_ERROR_CODES: dict[int, str] = {
    400: "invalid-argument",
    401: "unauthenticated",
    403: "permission-denied",
    409: "aborted",
    429: "resource-exhausted",
    499: "cancelled",
    500: "internal",
    501: "unimplemented",
    503: "unavailable",
    504: "deadline-exceeded",
}
