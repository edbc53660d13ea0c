"""Infrastructure Layer: durable storage and cross-cutting concerns.

Invariants:
    - File IO errors mapped to PersistenceError before leaving this layer

Design Decisions:
    - One module per concern: user_store (persistence), observability (logging)
"""
