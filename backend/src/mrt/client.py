"""
Jakarta MRT website data client.
Fetches the station snapshot (stations with nested schedules, estimates, facilities)
from a single JSON endpoint. No cache, no retry: every call hits the upstream.
"""
import logging
from typing import Any

import httpx

from src.monitoring.metrics import record_upstream_fetch
from src.mrt.errors import UpstreamError

logger = logging.getLogger(__name__)

MRT_STATIONS_URL = "https://www.jakartamrt.co.id/id/val/stasiuns"
MRT_REQUEST_TIMEOUT_SECONDS = 10.0


class MRTClient:
    """Long-lived client for the MRT stations endpoint. Safe to share across requests."""

    def __init__(
        self,
        url: str = MRT_STATIONS_URL,
        timeout: float = MRT_REQUEST_TIMEOUT_SECONDS,
        http_client: httpx.Client | None = None,
    ):
        """`timeout` applies only to the httpx.Client built here; an injected `http_client` keeps its own."""
        self._url = url
        self._http = http_client or httpx.Client(timeout=timeout)

    def fetch_stations(self) -> list[dict[str, Any]]:
        """
        GET the stations endpoint and return the raw JSON array of station objects.
        Raises UpstreamError on timeout, transport error, non-2xx status or a payload
        that is not a list of objects.
        """
        try:
            resp = self._http.get(self._url)
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException as e:
            record_upstream_fetch(ok=False)
            logger.warning("telemetry mrt_timeout url=%s", self._url, extra={"url": self._url})
            raise UpstreamError("MRT stations endpoint timed out.") from e
        except (httpx.HTTPError, ValueError) as e:
            record_upstream_fetch(ok=False)
            logger.warning(
                "telemetry mrt_api_error url=%s error=%s",
                self._url,
                str(e),
                extra={"url": self._url, "error": str(e)},
            )
            raise UpstreamError(f"MRT stations endpoint failed: {e}") from e

        if not isinstance(data, list) or not all(isinstance(s, dict) for s in data):
            record_upstream_fetch(ok=False)
            logger.warning("telemetry mrt_bad_payload type=%s", type(data).__name__)
            raise UpstreamError("MRT stations endpoint returned an unexpected payload (expected a list of stations).")

        record_upstream_fetch(ok=True)
        logger.info("telemetry mrt_stations_fetched count=%s", len(data), extra={"count": len(data)})
        return data

    def close(self) -> None:
        self._http.close()
