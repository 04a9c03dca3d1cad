"""Fetching, parsing and response assembly for vendor pages."""
