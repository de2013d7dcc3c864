"""Command-line interface for kvform."""
