"""Localized message rendering."""
