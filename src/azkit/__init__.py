"""Typed clients for Azure management and data-plane REST APIs."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("azkit")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
