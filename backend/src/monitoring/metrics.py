"""In-memory counters for the /metrics endpoint: HTTP responses by status class and upstream fetch outcomes."""
import time
from collections.abc import MutableMapping
from threading import Lock

_start_time = time.monotonic()
_requests: MutableMapping[str, int] = {}
_upstream: MutableMapping[str, int] = {}
_lock = Lock()


def _status_bucket(status_code: int) -> str:
    if 200 <= status_code < 300:
        return "2xx"
    if 400 <= status_code < 500:
        return "4xx"
    if status_code >= 500:
        return "5xx"
    return "other"


def record_request(status_code: int) -> None:
    bucket = _status_bucket(status_code)
    with _lock:
        _requests[bucket] = _requests.get(bucket, 0) + 1


def record_upstream_fetch(ok: bool) -> None:
    outcome = "ok" if ok else "error"
    with _lock:
        _upstream[outcome] = _upstream.get(outcome, 0) + 1


def reset_metrics() -> None:
    with _lock:
        _requests.clear()
        _upstream.clear()


def get_metrics() -> dict:
    with _lock:
        requests = dict(_requests)
        upstream = dict(_upstream)
    return {
        "requests_total": sum(requests.values()),
        "requests_2xx": requests.get("2xx", 0),
        "requests_4xx": requests.get("4xx", 0),
        "requests_5xx": requests.get("5xx", 0),
        "upstream_fetches_ok": upstream.get("ok", 0),
        "upstream_fetches_error": upstream.get("error", 0),
        "uptime_seconds": round(time.monotonic() - _start_time, 1),
    }
