"""Domain models and static tables.

- Pure data structures (Pydantic v2) and pricing constants.
- The domain knows nothing about HTTP, Monday.com or the CLI.
"""
