"""Folio - static portfolio and blog builder."""

__version__ = "0.3.0"
