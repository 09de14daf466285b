"""Services Layer — the entity resource mapper and the operations built on it.

Invariants:
    - Services depend on Store/Cache protocols, never on concrete clients
"""
