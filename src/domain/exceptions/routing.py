class RoutingError(Exception):
    """Base exception for itinerary search failures."""


class StopNotFound(RoutingError, LookupError):
    """Raised when an origin or destination code is not part of the network."""

    def __init__(self, code: object) -> None:
        super().__init__(f"Stop {code!r} does not exist in the network")
        self.code = code


class NetworkIntegrityError(RoutingError):
    """Raised when a network snapshot cannot be assembled consistently."""
