"""Domain-specific exceptions for routes services."""


class RoutesServiceError(Exception):
    """Base exception for routes services."""
    pass


class RouteNotFoundError(RoutesServiceError):
    """Raised when a route does not exist or belongs to someone else."""
    pass


class NoActiveRouteError(RoutesServiceError):
    """Raised when a conductor has no route in progress."""
    pass


class RouteInUseError(RoutesServiceError):
    """Raised when deleting a route that already has trips recorded."""
    pass
