"""Command handlers for the zim CLI."""
