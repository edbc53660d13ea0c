"""Services Layer: request handler orchestrating validation and the user store.

Invariants:
    - Services depend on core/ protocols, never on FastAPI
"""
