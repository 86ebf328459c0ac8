"""Importer Intel: trade-intelligence dashboard backend for USA import companies."""

__version__ = "0.1.0"
