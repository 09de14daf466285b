"""Core Layer — entity declarations, error taxonomy and collaborator protocols. No IO.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
"""
