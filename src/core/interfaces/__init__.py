"""Core contracts (Protocol).

- Concrete adapters implement these structurally.
- Services depend on the abstractions, never on the adapters.
"""
