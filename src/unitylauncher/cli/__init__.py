"""Command-line interface for unitylauncher."""
