"""Importer record store and detail fetch controller."""
