"""Customer API Package — CRUD over customers plus a cache passthrough.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
