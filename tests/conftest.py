"""
Pytest configuration shared across the TrackShare tests.

Environment variables are set before the application package is imported
so module-level configuration picks them up.
"""

import os

os.environ["TRACKSHARE_API_KEY"] = "test-key"
os.environ["TRACKSHARE_DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from trackshare.app import app
from trackshare.core import build_engine, get_session

API_HEADERS = {"X-API-Key": "test-key"}


def make_gpx(points, name=None, segments=None):
    """Build a GPX 1.1 document.

    ``points`` is a list of ``(lat, lon, ele, time)`` tuples placed in one
    segment; pass ``segments`` (a list of such lists) to split them up.
    """
    groups = segments if segments is not None else [points]
    seg_xml = []
    for group in groups:
        pts = []
        for lat, lon, ele, time in group:
            children = ""
            if ele is not None:
                children += f"<ele>{ele}</ele>"
            if time is not None:
                children += f"<time>{time}</time>"
            pts.append(f'<trkpt lat="{lat}" lon="{lon}">{children}</trkpt>')
        seg_xml.append("<trkseg>" + "".join(pts) + "</trkseg>")
    name_xml = f"<name>{name}</name>" if name else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">'
        f"<trk>{name_xml}{''.join(seg_xml)}</trk>"
        "</gpx>"
    )


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    test_engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def client(engine):
    """FastAPI test client bound to the in-memory database."""

    def _session_override():
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def three_point_gpx():
    return make_gpx(
        [
            (47.3769, 8.5417, 10, "2023-01-01T00:00:00Z"),
            (47.3800, 8.5450, 15, None),
            (47.3850, 8.5500, 12, "2023-01-01T01:00:00Z"),
        ],
        name="Morning Ride",
    )


@pytest.fixture
def gpx_factory():
    return make_gpx
