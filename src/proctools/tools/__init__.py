"""Thin wrappers around specific command-line tools."""
