"""Customer ORM — table definition for the customers table.

Invariants:
    - id is an autoincrement integer primary key assigned by the database
    - name is non-nullable text, not unique

Design Decisions:
    - Used for schema creation only; reads and writes go through SqlStore statements
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from customer_api.db.base import Base


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
