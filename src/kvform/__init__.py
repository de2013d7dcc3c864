"""
kvform - schema-driven form data to key-value settings mapping

Converts edited form values into an ordered list of mutations against a flat,
dot-separated key-value settings store, and reads stored values back for
display.

Package Structure:
- core/schema: storage shapes (record, entry, list), fields and field types
- core/form: edited values (scalar, array, if/then/else expression)
- core/settings: update planner, store reader, reference store
- cli/: command-line interface
- utils/: error types and error reporting
"""

__version__ = "0.1.0"
