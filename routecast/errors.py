"""Errors raised by the annotation pipeline."""


class RoutecastError(Exception):
    """Base class for pipeline failures. Every subclass ends the current run."""
    pass


class InvalidRoute(RoutecastError):
    """Raised when a route has fewer than two waypoints."""
    pass


class DirectionsUnavailable(RoutecastError):
    """Raised when the directions provider fails or returns no route."""
    pass


class WeatherUnavailable(RoutecastError):
    """Raised when the forecast provider fails or its response is unusable."""
    pass


class InvalidTransition(RoutecastError):
    """Raised when the route editor receives an event its state does not accept."""
    pass
