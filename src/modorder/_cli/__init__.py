"""Command-line interface for modorder."""
