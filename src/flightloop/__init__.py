"""FlightLoop - Interactive flight dynamics simulator."""

from flightloop.version import __version__

__all__ = ["__version__"]
