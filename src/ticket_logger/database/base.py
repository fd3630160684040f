"""
This Base class is used as the declarative base for all SQLAlchemy ORM models.
Import this Base class in any model module that defines ORM classes.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


# Naming convention for constraints and indexes.
# Stable constraint names matter here: the integrity classifier reports them
# (e.g. "uq_provinces_code") when a duplicate code slips past the service pre-check.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
