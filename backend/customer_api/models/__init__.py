"""ORM Models — SQLAlchemy declarative models backing the store's tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from customer_api.models.customer import Customer  # noqa: F401
