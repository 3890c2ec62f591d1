"""Programmable-transaction building for the setup scripts."""

from .build import Argument, TransactionBlock  # noqa: F401
from .ops import PtbSetupBuilder, SetupBuilder  # noqa: F401

__all__ = ["Argument", "TransactionBlock", "PtbSetupBuilder", "SetupBuilder"]
