# app/core/exceptions.py
# -----------------------------------------------------------------------------
# Error taxonomy for the venue search core
# - InputError / GeocodeError / NotFoundError propagate to the routers
# - UpstreamUnavailable never leaves the venue search orchestrator
# -----------------------------------------------------------------------------


class MidpointError(Exception):
    """Base class for errors raised by the search core."""


class InputError(MidpointError):
    """Caller supplied too few locations, no venue type, or an empty query."""


class GeocodeError(MidpointError):
    def __init__(self, query: str, reason: str | None = None):
        self.query = query
        self.reason = reason
        super().__init__(f"Failed to geocode postcode: {query}")


class UpstreamUnavailable(MidpointError):
    """The venue index could not be queried or returned an unusable payload."""


class NotFoundError(MidpointError):
    pass
