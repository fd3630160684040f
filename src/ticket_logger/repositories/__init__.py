"""
Repository layer: one repository per entity on top of the generic `BaseRepository`.

Usage:
    from ticket_logger.repositories import RegionRepository, ProvinceRepository
"""

from .base_repository import BaseRepository
from .region_repository import RegionRepository
from .province_repository import ProvinceRepository
from .supermarket_repository import SupermarketRepository
from .location_repository import LocationRepository
from .product_repository import ProductRepository
from .ticket_repository import TicketRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "RegionRepository",
    "ProvinceRepository",
    "SupermarketRepository",
    "LocationRepository",
    "ProductRepository",
    "TicketRepository",
    "UserRepository",
]
