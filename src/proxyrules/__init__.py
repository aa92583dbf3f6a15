"""proxyrules: HTTP service for proxy traffic-classification rules."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("proxyrules")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
