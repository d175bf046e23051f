"""errors.py — Exceptions raised by routing clients."""


class RoutingError(Exception):
    """The routing service could not produce a path."""
