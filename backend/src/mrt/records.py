"""
Typed records decoded from the MRT stations payload.
Upstream field names are Indonesian (nid, title, estimasi, fasilitas, ...).
"""
from typing import Any, NamedTuple

from src.mrt.errors import UpstreamError


class EstimateRecord(NamedTuple):
    station_id: str  # stasiun_nid: destination station
    fare: str  # tarif, e.g. "Rp 3.000"
    time: str  # waktu


class FacilityRecord(NamedTuple):
    facility_id: str
    title: str
    facility_type: str
    image: str


class StationRecord(NamedTuple):
    station_id: str
    name: str
    estimates: tuple[EstimateRecord, ...]
    facilities: tuple[FacilityRecord, ...]


class ScheduleRecord(NamedTuple):
    station_id: str
    station_name: str
    schedule_bundaran_hi: str  # jadwal_hi_biasa
    schedule_lebak_bulus: str  # jadwal_lb_biasa


def _text(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    # Ids arrive as text or integers; anything else means the payload shape changed.
    if isinstance(value, (dict, list, bool, float)):
        raise UpstreamError(f"Unexpected value for field {key!r} in MRT payload.")
    return str(value)


def _objects(raw: dict[str, Any], key: str) -> list[dict[str, Any]]:
    items = raw.get(key)
    if items is None:
        return []
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise UpstreamError(f"Unexpected value for field {key!r} in MRT payload (expected a list of objects).")
    return items


def parse_estimate(raw: dict[str, Any]) -> EstimateRecord:
    return EstimateRecord(
        station_id=_text(raw, "stasiun_nid"),
        fare=_text(raw, "tarif"),
        time=_text(raw, "waktu"),
    )


def parse_facility(raw: dict[str, Any]) -> FacilityRecord:
    return FacilityRecord(
        facility_id=_text(raw, "nid"),
        title=_text(raw, "title"),
        facility_type=_text(raw, "jenis_fasilitas"),
        image=_text(raw, "cover"),
    )


def parse_station(raw: dict[str, Any]) -> StationRecord:
    """Decode one station object, including its nested estimasi and fasilitas lists."""
    return StationRecord(
        station_id=_text(raw, "nid"),
        name=_text(raw, "title"),
        estimates=tuple(parse_estimate(e) for e in _objects(raw, "estimasi")),
        facilities=tuple(parse_facility(f) for f in _objects(raw, "fasilitas")),
    )


def parse_schedule(raw: dict[str, Any]) -> ScheduleRecord:
    return ScheduleRecord(
        station_id=_text(raw, "nid"),
        station_name=_text(raw, "title"),
        schedule_bundaran_hi=_text(raw, "jadwal_hi_biasa"),
        schedule_lebak_bulus=_text(raw, "jadwal_lb_biasa"),
    )
