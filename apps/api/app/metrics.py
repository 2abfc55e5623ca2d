from __future__ import annotations

import re

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.requests import Request


http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

session_tokens_issued_total = Counter(
    "session_tokens_issued_total",
    "Session tokens issued by role",
    ["role"],
)

session_gate_rejections_total = Counter(
    "session_gate_rejections_total",
    "Requests rejected by the session gate",
    ["reason"],
)

store_operations_total = Counter(
    "store_operations_total",
    "Document store operations",
    ["operation", "collection"],
)


_ID_SEGMENT_RE = re.compile(r"/[A-Za-z0-9_-]{16,}\b")
_PATH_PARAM_RE = re.compile(r"\{[^{}]+\}")


def _sanitize_path(path: str) -> str:
    return _ID_SEGMENT_RE.sub("/{id}", path)


def resolve_http_path_label(request: Request) -> str:
    route = request.scope.get("route")
    if route is not None:
        path_format = getattr(route, "path_format", None) or getattr(route, "path", None)
        if isinstance(path_format, str) and path_format:
            return _PATH_PARAM_RE.sub("{id}", path_format)
    return _sanitize_path(request.url.path)


def collection_label(collection: str) -> str:
    """Collapse sub-collection paths (``shoots/abc/assignments``) to a stable label."""
    parts = [part for part in collection.split("/") if part]
    if len(parts) >= 3:
        return f"{parts[0]}.{parts[-1]}"
    return parts[0] if parts else collection


def observe_http_request(method: str, path: str, status: int, duration: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_duration_seconds.labels(method=method, path=path).observe(duration)


def observe_session_issued(role: str) -> None:
    session_tokens_issued_total.labels(role=role).inc()


def observe_gate_rejection(reason: str) -> None:
    session_gate_rejections_total.labels(reason=reason).inc()


def observe_store_operation(operation: str, collection: str) -> None:
    store_operations_total.labels(operation=operation, collection=collection_label(collection)).inc()


def generate_metrics_payload() -> bytes:
    return generate_latest()


def metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
