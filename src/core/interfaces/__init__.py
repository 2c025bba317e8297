"""Core interfaces.

- Contracts (Protocol) implemented by concrete adapters.
- The core depends on these abstractions, never on Monday.com or httpx.
"""
