"""
Core modules for kvform.

- schema: storage shapes, fields and field types
- form: edited values and raw input coercion
- settings: update planning, store reading and the reference store
- utils: configuration and logging
"""
