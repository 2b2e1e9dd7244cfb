"""Tests for decoding upstream station objects into records."""
import pytest

from src.mrt.errors import UpstreamError
from src.mrt.records import EstimateRecord, FacilityRecord, parse_schedule, parse_station


def test_parse_station_full():
    raw = {
        "nid": "18",
        "title": "Blok M BCA",
        "estimasi": [{"stasiun_nid": "19", "tarif": "Rp 4.000", "waktu": "3"}],
        "fasilitas": [{"nid": "7", "title": "Eskalator", "jenis_fasilitas": "Aksesibilitas", "cover": "/img/esk.png"}],
    }
    station = parse_station(raw)
    assert station.station_id == "18"
    assert station.name == "Blok M BCA"
    assert station.estimates == (EstimateRecord(station_id="19", fare="Rp 4.000", time="3"),)
    assert station.facilities == (
        FacilityRecord(facility_id="7", title="Eskalator", facility_type="Aksesibilitas", image="/img/esk.png"),
    )


def test_parse_station_minimal():
    """Missing or null fields decode to empty strings and empty sequences."""
    station = parse_station({"nid": None, "estimasi": None})
    assert station.station_id == ""
    assert station.name == ""
    assert station.estimates == ()
    assert station.facilities == ()


def test_parse_station_numeric_id_is_text():
    assert parse_station({"nid": 42, "title": "Senayan"}).station_id == "42"


def test_parse_station_rejects_non_list_nested():
    with pytest.raises(UpstreamError):
        parse_station({"nid": "1", "estimasi": {"stasiun_nid": "2"}})


def test_parse_station_rejects_object_for_text_field():
    with pytest.raises(UpstreamError):
        parse_station({"nid": {"value": "1"}})


def test_parse_schedule():
    raw = {"nid": "3", "title": "Fatmawati", "jadwal_hi_biasa": "05:00:00", "jadwal_lb_biasa": None}
    schedule = parse_schedule(raw)
    assert schedule.station_id == "3"
    assert schedule.station_name == "Fatmawati"
    assert schedule.schedule_bundaran_hi == "05:00:00"
    assert schedule.schedule_lebak_bulus == ""


@pytest.mark.parametrize("value", [True, 1.0])
def test_parse_station_rejects_bool_and_float_ids(value):
    with pytest.raises(UpstreamError):
        parse_station({"nid": value, "title": "Senayan"})
