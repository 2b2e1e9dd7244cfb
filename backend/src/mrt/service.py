"""
Station directory service: four read-only queries over the MRT stations snapshot.
Every call fetches a fresh snapshot; nothing is cached between calls.
"""
import logging
from datetime import datetime
from typing import Any, Callable
from zoneinfo import ZoneInfo

from src.mrt.client import MRTClient
from src.mrt.errors import StationNotFound
from src.mrt.models import (
    EstimateResponse,
    FacilityResponse,
    ScheduleResponse,
    StationEstimateResponse,
    StationFacilityResponse,
    StationResponse,
)
from src.mrt.records import StationRecord, parse_schedule, parse_station
from src.mrt.schedule import upcoming_departures

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Jakarta"


def _station_after_excluded(stations: list[StationRecord], station_id: str) -> StationRecord:
    """
    First station whose id differs from station_id.
    NOTE: this returns the station *after* a leading match, not the match itself.
    Existing API clients depend on it; see DESIGN.md before changing.
    """
    for station in stations:
        if station.station_id == station_id:
            continue
        return station
    raise StationNotFound(station_id)


class StationService:
    def __init__(self, client: MRTClient, clock: Callable[[], datetime] | None = None, timezone: str = DEFAULT_TIMEZONE):
        self._client = client
        tz = ZoneInfo(timezone)
        self._clock = clock or (lambda: datetime.now(tz))

    def _snapshot(self) -> list[dict[str, Any]]:
        return self._client.fetch_stations()

    def _stations(self) -> list[StationRecord]:
        return [parse_station(raw) for raw in self._snapshot()]

    def list_stations(self) -> list[StationResponse]:
        return [StationResponse(id=s.station_id, name=s.name) for s in self._stations()]

    def get_schedule(self, station_id: str) -> list[ScheduleResponse]:
        """Upcoming departures (after now) from the station, in both directions."""
        schedules = [parse_schedule(raw) for raw in self._snapshot()]
        selected = next((s for s in schedules if s.station_id and s.station_id == station_id), None)
        if selected is None:
            raise StationNotFound(station_id)

        departures = upcoming_departures(selected, self._clock())
        logger.info(
            "telemetry schedule_served station_id=%s count=%s",
            station_id,
            len(departures),
            extra={"station_id": station_id, "count": len(departures)},
        )
        return [ScheduleResponse(station=name, time=t) for name, t in departures]

    def get_estimates(self, station_id: str) -> list[StationEstimateResponse]:
        stations = self._stations()
        name_by_id = {s.station_id: s.name for s in stations}
        station = _station_after_excluded(stations, station_id)
        estimates = [
            EstimateResponse(station=name_by_id.get(e.station_id, ""), fare=e.fare, time=e.time)
            for e in station.estimates
        ]
        return [StationEstimateResponse(station=station.name, estimates=estimates)]

    def get_facilities(self, station_id: str) -> list[StationFacilityResponse]:
        station = _station_after_excluded(self._stations(), station_id)
        facilities = [
            FacilityResponse(title=f.title, facility_type=f.facility_type, image=f.image)
            for f in station.facilities
        ]
        return [StationFacilityResponse(station=station.name, facilities=facilities)]
