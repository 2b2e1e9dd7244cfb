"""Pytest configuration and fixtures."""
import sys
from datetime import datetime
from pathlib import Path

import httpx
import pytest

# Ensure backend root is on path when running pytest from repo root or backend
backend = Path(__file__).resolve().parent.parent
if str(backend) not in sys.path:
    sys.path.insert(0, str(backend))

from src.mrt.client import MRTClient  # noqa: E402
from src.mrt.service import StationService  # noqa: E402

STATIONS_URL = "https://mrt.test/id/val/stasiuns"


@pytest.fixture
def stations_payload():
    """Three stations in upstream order, shaped like the MRT website JSON."""
    return [
        {
            "nid": "A",
            "title": "Lebak Bulus",
            "jadwal_hi_biasa": "05:00:00, 12:30:00, 23:00:00",
            "jadwal_lb_biasa": "",
            "estimasi": [{"stasiun_nid": "B", "tarif": "Rp 3.000", "waktu": "2"}],
            "fasilitas": [{"nid": "10", "title": "Lift", "jenis_fasilitas": "Aksesibilitas", "cover": "lift.png"}],
        },
        {
            "nid": "B",
            "title": "Fatmawati",
            "jadwal_hi_biasa": "08:00:00, 23:59:59",
            "jadwal_lb_biasa": "06:15:00,13:00:00,",
            "estimasi": [
                {"stasiun_nid": "A", "tarif": "Rp 3.000", "waktu": "2"},
                {"stasiun_nid": "C", "tarif": "Rp 4.000", "waktu": "5"},
                {"stasiun_nid": "Z", "tarif": "Rp 14.000", "waktu": "30"},
            ],
            "fasilitas": [
                {"nid": "11", "title": "Toilet", "jenis_fasilitas": "Umum", "cover": "toilet.png"},
                {"nid": "12", "title": "Musholla", "jenis_fasilitas": "Ibadah", "cover": "musholla.png"},
            ],
        },
        {
            "nid": "C",
            "title": "Bundaran HI",
            "jadwal_hi_biasa": "",
            "jadwal_lb_biasa": "05:30:00",
            "estimasi": [],
            "fasilitas": [],
        },
    ]


def mock_http_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def json_http_client(payload, status_code: int = 200) -> httpx.Client:
    return mock_http_client(lambda request: httpx.Response(status_code, json=payload))


@pytest.fixture
def make_service():
    """Build a StationService over a fake upstream returning `payload`, with a fixed clock."""

    def _make(payload, now: datetime = datetime(2025, 3, 1, 12, 0, 0)) -> StationService:
        client = MRTClient(url=STATIONS_URL, http_client=json_http_client(payload))
        return StationService(client, clock=lambda: now)

    return _make
