"""Command-line entry points for model router."""
