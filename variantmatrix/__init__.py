"""Variant matrix synthesis and reconciliation for product catalogs."""

__version__ = "0.1.0"
