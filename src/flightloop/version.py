"""Version information for FlightLoop."""

from importlib.metadata import PackageNotFoundError, version

__version__ = "0.1.0"  # Fallback version


def get_version() -> str:
    """Get the installed package version.

    Returns:
        Version string (e.g., "0.1.0"), or the fallback when the package
        is not installed.
    """
    try:
        return version("flightloop")
    except PackageNotFoundError:
        return __version__
