"""Domain models and value types.

- Pure, strict data structures (Pydantic v2) and predicates.
- The domain knows nothing about HTTP, the CLI or configuration files.
"""
