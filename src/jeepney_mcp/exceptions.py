"""Exceptions raised by the jeepney planner."""


class JeepneyPlannerError(Exception):
    """Base exception for the jeepney planner."""


class InvalidInputError(JeepneyPlannerError, ValueError):
    """Raised when origin or destination coordinates are missing or unparseable."""


class GatewayUnavailableError(JeepneyPlannerError, RuntimeError):
    """Raised when the external directions gateway cannot answer.

    Covers network errors, auth/quota rejections, and requests that were not
    attempted (no API key, point outside the service area, daily limit).
    """


class RouteDataError(JeepneyPlannerError):
    """Raised when route geometry input cannot be ingested."""
