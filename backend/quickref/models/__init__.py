"""ORM Models — SQLAlchemy declarative models for the database example section.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata knows every table before create_all
"""

from quickref.models.item import Item  # noqa: F401
