"""Unit tests for trackshare/services/gpx.py (GPX decoding)."""

from datetime import datetime, timezone

import pytest

from trackshare.core import DecodeError
from trackshare.services import gpx as gpx_module
from trackshare.services.gpx import DEFAULT_TRACK_NAME, decode_gpx


class TestDecodePoints:
    def test_flattens_segments_and_tracks_in_document_order(self, gpx_factory):
        doc = gpx_factory(
            None,
            segments=[
                [(1.0, 1.0, None, None), (2.0, 2.0, None, None)],
                [(3.0, 3.0, None, None)],
            ],
        )
        # Append a second <trk> holding one more point.
        doc = doc.replace(
            "</trk></gpx>",
            '</trk><trk><trkseg><trkpt lat="4.0" lon="4.0"/></trkseg></trk></gpx>',
        )

        decoded = decode_gpx(doc)

        assert [p.latitude for p in decoded.points] == [1.0, 2.0, 3.0, 4.0]
        assert [p.longitude for p in decoded.points] == [1.0, 2.0, 3.0, 4.0]

    def test_optional_fields_are_independent_per_point(self, gpx_factory):
        doc = gpx_factory(
            [
                (10.0, 20.0, 100.5, None),
                (10.1, 20.1, None, "2023-01-01T00:00:00Z"),
                (10.2, 20.2, None, None),
            ]
        )

        points = decode_gpx(doc).points

        assert points[0].elevation == pytest.approx(100.5)
        assert points[0].time is None
        assert points[1].elevation is None
        assert points[1].time == datetime(2023, 1, 1, tzinfo=timezone.utc)
        assert points[2].elevation is None
        assert points[2].time is None

    def test_times_are_utc_aware(self, gpx_factory):
        doc = gpx_factory([(0.0, 0.0, None, "2023-06-01T12:00:00Z")])

        point = decode_gpx(doc).points[0]

        assert point.time.utcoffset().total_seconds() == 0

    def test_bounds_cover_all_points(self, gpx_factory):
        doc = gpx_factory([(1.0, 5.0, None, None), (-2.0, 7.0, None, None)])

        assert decode_gpx(doc).bounds() == (-2.0, 5.0, 1.0, 7.0)


class TestDecodeName:
    def test_uses_track_name(self, gpx_factory):
        doc = gpx_factory([(0.0, 0.0, None, None)], name="Evening Run")

        assert decode_gpx(doc).name == "Evening Run"

    def test_defaults_when_absent(self, gpx_factory):
        doc = gpx_factory([(0.0, 0.0, None, None)])

        assert decode_gpx(doc).name == DEFAULT_TRACK_NAME

    def test_first_named_track_wins(self, gpx_factory):
        doc = gpx_factory([(0.0, 0.0, None, None)]).replace(
            "</trk></gpx>",
            "</trk><trk><name>Second</name>"
            '<trkseg><trkpt lat="1" lon="1"/></trkseg></trk>'
            "<trk><name>Third</name></trk></gpx>",
        )

        assert decode_gpx(doc).name == "Second"

    def test_first_name_is_taken_as_written(self, gpx_factory):
        doc = gpx_factory([(0.0, 0.0, None, None)], name=" Lap 1 ").replace(
            "</trk></gpx>",
            "</trk><trk><name>Lap 2</name></trk></gpx>",
        )

        assert decode_gpx(doc).name == " Lap 1 "


class TestDecodeFailures:
    def test_malformed_markup(self):
        with pytest.raises(DecodeError):
            decode_gpx("<gpx><trk><trkseg><trkpt lat='1' lon='2'>")

    def test_not_markup_at_all(self):
        with pytest.raises(DecodeError):
            decode_gpx("this is not a gpx file")

    def test_no_points(self, gpx_factory):
        with pytest.raises(DecodeError, match="No track points"):
            decode_gpx(gpx_factory([]))

    def test_no_tracks(self):
        doc = '<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1"></gpx>'
        with pytest.raises(DecodeError):
            decode_gpx(doc)

    @pytest.mark.parametrize(
        "lat, lon", [("nan", 0.0), (0.0, "nan"), ("inf", 0.0), (0.0, "-inf")]
    )
    def test_rejects_non_finite_coordinates(self, gpx_factory, lat, lon):
        doc = gpx_factory([(0.0, 0.0, None, None), (lat, lon, None, None)])

        with pytest.raises(DecodeError, match="non-finite"):
            decode_gpx(doc)

    def test_out_of_range_coordinates_pass_through(self, gpx_factory):
        doc = gpx_factory([(91.0, 0.0, None, None), (0.0, -181.0, None, None)])

        points = decode_gpx(doc).points

        assert (points[0].latitude, points[1].longitude) == (91.0, -181.0)


class TestUnreadableElevation:
    @pytest.mark.parametrize("raw", ["abc", " ", "", "nan", "12..5"])
    def test_bad_elevation_on_one_point_is_absent(self, gpx_factory, raw):
        doc = gpx_factory(
            [
                (47.0, 8.0, 10, "2023-01-01T00:00:00Z"),
                (47.1, 8.1, raw, None),
                (47.2, 8.2, 12, "2023-01-01T01:00:00Z"),
            ]
        )
        # An empty string still emits <ele></ele>.

        points = decode_gpx(doc).points

        assert len(points) == 3
        assert points[0].elevation == 10
        assert points[1].elevation is None
        assert points[2].elevation == 12

    def test_prefixed_bad_elevation_is_absent(self):
        doc = (
            '<gpx:gpx version="1.1" xmlns:gpx="http://www.topografix.com/GPX/1/1">'
            "<gpx:trk><gpx:trkseg>"
            '<gpx:trkpt lat="1" lon="1"><gpx:ele>abc</gpx:ele></gpx:trkpt>'
            "</gpx:trkseg></gpx:trk></gpx:gpx>"
        )
        cleaned = gpx_module._drop_unreadable_elevations(doc)

        assert "abc" not in cleaned
        assert "<gpx:trkpt" in cleaned

    def test_readable_elevations_are_kept(self, gpx_factory):
        doc = gpx_factory([(1.0, 1.0, " 12.5 ", None), (2.0, 2.0, "-3e2", None)])

        points = decode_gpx(doc).points

        assert points[0].elevation == pytest.approx(12.5)
        assert points[1].elevation == pytest.approx(-300.0)
