"""gastips: Solidity gas-optimization rule catalog."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gastips")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
