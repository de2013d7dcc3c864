"""Utility helpers shared across kvform."""
