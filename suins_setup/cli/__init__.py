"""Typer application for the suins-setup command."""

from .main import app  # noqa: F401

__all__ = ["app"]
