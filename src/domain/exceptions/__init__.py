from .routing import NetworkIntegrityError, RoutingError, StopNotFound

__all__ = ["NetworkIntegrityError", "RoutingError", "StopNotFound"]
