"""Journey matching over the local route catalog.

Candidates are scored purely by distance (walking plus riding). There is no
weighting for time, fare, or frequency since none of those are known locally.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from jeepney_mcp.models.routes import GeoPoint, JeepneyRoute
from jeepney_mcp.services.geometry import (
    StopProjection,
    TransferPoint,
    find_nearest_stop,
    find_transfer_point,
    path_distance,
)


@dataclass
class SingleRideCandidate:
    """Ride one route from the stop nearest the origin to the stop nearest the destination."""

    route: JeepneyRoute
    from_projection: StopProjection
    to_projection: StopProjection
    ride_distance: float
    walk_distance: float  # Origin walk + destination walk
    total_distance: float


@dataclass
class MultiRideLegDistances:
    walk_to_route1: float
    route1_ride: float
    walk_between_routes: float
    route2_ride: float
    walk_from_route2: float

    @property
    def total(self) -> float:
        return (
            self.walk_to_route1
            + self.route1_ride
            + self.walk_between_routes
            + self.route2_ride
            + self.walk_from_route2
        )


@dataclass
class MultiRideCandidate:
    """Ride route1 to a transfer point, walk, then ride route2."""

    route1: JeepneyRoute
    route2: JeepneyRoute
    from_projection: StopProjection  # Origin onto route1
    to_projection: StopProjection  # Destination onto route2
    transfer_point: TransferPoint
    leg_distances: MultiRideLegDistances
    total_distance: float


def find_single_ride(
    origin: GeoPoint,
    destination: GeoPoint,
    routes: Sequence[JeepneyRoute],
) -> SingleRideCandidate | None:
    """Find the best direct (no transfer) ride.

    The first route with the minimal total distance wins.

    Returns:
        SingleRideCandidate, or None if no route has usable geometry.
    """
    best: SingleRideCandidate | None = None

    for route in routes:
        from_projection = find_nearest_stop(origin, route)
        to_projection = find_nearest_stop(destination, route)
        if from_projection is None or to_projection is None:
            continue

        ride_distance = path_distance(route, from_projection.stop_index, to_projection.stop_index)
        walk_distance = from_projection.distance_meters + to_projection.distance_meters
        total_distance = ride_distance + walk_distance

        if best is None or total_distance < best.total_distance:
            best = SingleRideCandidate(
                route=route,
                from_projection=from_projection,
                to_projection=to_projection,
                ride_distance=ride_distance,
                walk_distance=walk_distance,
                total_distance=total_distance,
            )

    return best


def find_multi_ride(
    origin: GeoPoint,
    destination: GeoPoint,
    routes: Sequence[JeepneyRoute],
) -> MultiRideCandidate | None:
    """Find the best one-transfer journey over every ordered pair of distinct routes.

    Quadratic in the number of routes (and in stops per pair for the transfer
    search), so only suitable for small catalogs.

    Returns:
        MultiRideCandidate, or None if fewer than two usable routes exist.
    """
    best: MultiRideCandidate | None = None

    # Project once per route; pairs reuse the projections
    origin_projections = [find_nearest_stop(origin, route) for route in routes]
    destination_projections = [find_nearest_stop(destination, route) for route in routes]

    for i, route1 in enumerate(routes):
        from_projection = origin_projections[i]
        if from_projection is None:
            continue

        for j, route2 in enumerate(routes):
            # Pairs are distinct by catalog position, never the same route twice
            if i == j:
                continue

            to_projection = destination_projections[j]
            if to_projection is None:
                continue

            transfer = find_transfer_point(route1, route2)
            if transfer is None:
                continue

            legs = MultiRideLegDistances(
                walk_to_route1=from_projection.distance_meters,
                route1_ride=path_distance(
                    route1, from_projection.stop_index, transfer.route1_stop_index
                ),
                walk_between_routes=transfer.distance_meters,
                route2_ride=path_distance(
                    route2, transfer.route2_stop_index, to_projection.stop_index
                ),
                walk_from_route2=to_projection.distance_meters,
            )
            total_distance = legs.total

            if best is None or total_distance < best.total_distance:
                best = MultiRideCandidate(
                    route1=route1,
                    route2=route2,
                    from_projection=from_projection,
                    to_projection=to_projection,
                    transfer_point=transfer,
                    leg_distances=legs,
                    total_distance=total_distance,
                )

    return best
