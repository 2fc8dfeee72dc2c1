"""Command-line interface for proctools."""
