"""
notary_entrypoint package initializer.

This package provides the container entrypoint that selects a
configuration file for ``notary-server`` from the ``ENV`` environment
variable and then hands the process over to the server.

The package exposes a ``__version__`` attribute indicating the installed
version. The version is read from pyproject.toml via importlib.metadata –
this is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("notary-entrypoint")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
