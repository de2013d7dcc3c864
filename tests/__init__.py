"""
Test package marker.

Keeps `tests` from being treated as a namespace package when another
checkout's `tests/` directory is also on `sys.path`.
"""
