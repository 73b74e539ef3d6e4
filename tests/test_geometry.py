"""Tests for geometric primitives over route stop sequences."""

import pytest

from jeepney_mcp.models.routes import GeoPoint, JeepneyRoute
from jeepney_mcp.services.geometry import (
    decode_polyline,
    find_nearest_stop,
    find_transfer_point,
    haversine_distance,
    is_within_bounds,
    path_distance,
    point_distance,
    route_length,
)


def make_route(code: str, *stops: tuple[float, float]) -> JeepneyRoute:
    return JeepneyRoute(code=code, stops=tuple(GeoPoint(lat=lat, lng=lng) for lat, lng in stops))


class TestHaversine:
    def test_zero_distance(self) -> None:
        assert haversine_distance(10.3, 123.9, 10.3, 123.9) == 0

    def test_one_hundredth_degree_at_equator(self) -> None:
        """0.01 degrees of longitude at the equator is about 1.11 km."""
        assert haversine_distance(0, 0, 0, 0.01) == pytest.approx(1111.95, abs=0.5)

    def test_symmetric(self) -> None:
        a = GeoPoint(lat=10.30, lng=123.88)
        b = GeoPoint(lat=10.32, lng=123.90)
        assert point_distance(a, b) == pytest.approx(point_distance(b, a))


class TestFindNearestStop:
    def test_picks_closest_stop(self) -> None:
        route = make_route("R", (0, 0), (0, 1), (0, 2))

        projection = find_nearest_stop(GeoPoint(lat=0, lng=1.9), route)

        assert projection is not None
        assert projection.stop_index == 2
        assert projection.route is route
        assert projection.stop == GeoPoint(lat=0, lng=2)
        assert projection.distance_meters == pytest.approx(haversine_distance(0, 1.9, 0, 2))

    def test_tie_goes_to_lowest_index(self) -> None:
        route = make_route("R", (1, 1), (5, 5), (1, 1))

        projection = find_nearest_stop(GeoPoint(lat=1, lng=1), route)

        assert projection is not None
        assert projection.stop_index == 0

    def test_equidistant_stops_tie_to_lowest_index(self) -> None:
        route = make_route("R", (0, 0), (0, 1))

        projection = find_nearest_stop(GeoPoint(lat=0, lng=0.5), route)

        assert projection is not None
        assert projection.stop_index == 0

    def test_route_without_stops(self) -> None:
        route = JeepneyRoute(code="EMPTY", stops=())
        assert find_nearest_stop(GeoPoint(lat=0, lng=0), route) is None


class TestPathDistance:
    @pytest.fixture
    def route(self) -> JeepneyRoute:
        return make_route("R", (10.30, 123.88), (10.31, 123.89), (10.32, 123.91), (10.30, 123.92))

    def test_sums_segments(self, route: JeepneyRoute) -> None:
        expected = point_distance(route.stops[0], route.stops[1]) + point_distance(
            route.stops[1], route.stops[2]
        )
        assert path_distance(route, 0, 2) == pytest.approx(expected)

    def test_same_index_is_zero(self, route: JeepneyRoute) -> None:
        assert path_distance(route, 2, 2) == 0

    def test_symmetric_for_all_index_pairs(self, route: JeepneyRoute) -> None:
        n = len(route.stops)
        for i in range(n):
            for j in range(n):
                assert path_distance(route, i, j) == path_distance(route, j, i)

    def test_route_length_is_full_path(self, route: JeepneyRoute) -> None:
        assert route_length(route) == pytest.approx(path_distance(route, 0, 3))
        assert route_length(JeepneyRoute(code="EMPTY", stops=())) == 0.0


class TestFindTransferPoint:
    def test_shared_stop(self) -> None:
        r1 = make_route("R1", (10.30, 123.88), (10.32, 123.90))
        r2 = make_route("R2", (10.32, 123.90), (10.34, 123.92))

        transfer = find_transfer_point(r1, r2)

        assert transfer is not None
        assert transfer.route1 is r1
        assert transfer.route2 is r2
        assert transfer.route1_stop_index == 1
        assert transfer.route2_stop_index == 0
        assert transfer.distance_meters == 0

    def test_closest_pair_without_shared_stop(self) -> None:
        r1 = make_route("R1", (0, 0), (0, 0.01), (0, 0.02))
        r2 = make_route("R2", (0.03, 0.0), (0.001, 0.011), (0.03, 0.02))

        transfer = find_transfer_point(r1, r2)

        assert transfer is not None
        assert (transfer.route1_stop_index, transfer.route2_stop_index) == (1, 1)
        assert transfer.distance_meters == pytest.approx(
            haversine_distance(0, 0.01, 0.001, 0.011)
        )

    def test_no_stops(self) -> None:
        r1 = make_route("R1", (0, 0), (0, 1))
        empty = JeepneyRoute(code="EMPTY", stops=())
        assert find_transfer_point(r1, empty) is None
        assert find_transfer_point(empty, r1) is None


class TestDecodePolyline:
    def test_google_reference_example(self) -> None:
        points = decode_polyline("_p~iF~ps|U_ulLnnqC_mqNvxq`@")

        assert len(points) == 3
        assert points[0].lat == pytest.approx(38.5)
        assert points[0].lng == pytest.approx(-120.2)
        assert points[1].lat == pytest.approx(40.7)
        assert points[1].lng == pytest.approx(-120.95)
        assert points[2].lat == pytest.approx(43.252)
        assert points[2].lng == pytest.approx(-126.453)

    def test_empty(self) -> None:
        assert decode_polyline("") == []
        assert decode_polyline(None) == []


def test_is_within_bounds_inclusive() -> None:
    assert is_within_bounds(GeoPoint(lat=10.3, lng=123.9), 10.0, 11.0, 123.5, 124.5)
    assert is_within_bounds(GeoPoint(lat=10.0, lng=124.5), 10.0, 11.0, 123.5, 124.5)
    assert not is_within_bounds(GeoPoint(lat=14.6, lng=121.0), 10.0, 11.0, 123.5, 124.5)
