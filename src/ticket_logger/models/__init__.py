r"""
Centralized access to all database models of the ticket logger.

Importing this package registers every table on `Base.metadata`, which is what
`create_all()` (startup and tests) relies on.

Example:

    from ticket_logger.models import Region, Province, Location
"""

from .region import Region
from .province import Province
from .supermarket import Supermarket
from .location import Location
from .product import Product, ticket_products
from .ticket import Ticket
from .user import User

__all__ = [
    "Region",
    "Province",
    "Supermarket",
    "Location",
    "Product",
    "ticket_products",
    "Ticket",
    "User",
]
