"""Procedural island terrain rasters."""
