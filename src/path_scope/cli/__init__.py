"""Command-line interface for path-scope."""
