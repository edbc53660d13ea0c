"""API Layer: FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Error bodies are produced only by error_handlers.py

Design Decisions:
    - Thin routes delegate to services/user_handler.py
"""
