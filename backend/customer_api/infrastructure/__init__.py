"""Infrastructure Layer — concrete Store/Cache clients and logging setup.

Invariants:
    - Driver exceptions never leave this layer; they become BackendError
"""
