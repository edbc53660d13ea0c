"""Mock Users API: JSON-file-backed user CRUD service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Only the version lives here: explicit imports elsewhere, no star exports
"""

__version__ = "1.0.0"
