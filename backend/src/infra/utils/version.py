from importlib import metadata

DEFAULT_VERSION = "1.0.0"
DISTRIBUTION_NAME = "noc-monitor"


def get_version() -> str:
    """Version from ``backend/version.py``, else the installed distribution."""
    try:
        from version import __version__
    except ImportError:
        return _installed_version()

    return __version__


def _installed_version() -> str:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return DEFAULT_VERSION
