"""cm5probe - CPU and GPIO peripheral verification for compute modules."""

from cm5probe.version.cm5probe_version import CM5PROBE_VERSION, Version

__version__ = str(CM5PROBE_VERSION)
__version_info__ = CM5PROBE_VERSION

__all__ = [
    "CM5PROBE_VERSION",
    "Version",
    "__version__",
    "__version_info__",
]
