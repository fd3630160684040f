from .base_service import BaseService
from .file_storage_service import FileStorageService, ImageUpload
from .region_service import RegionService
from .province_service import ProvinceService
from .supermarket_service import SupermarketService
from .location_service import LocationService
from .ticket_service import TicketService
from .auth_service import AuthService

__all__ = [
    "BaseService",
    "FileStorageService",
    "ImageUpload",
    "RegionService",
    "ProvinceService",
    "SupermarketService",
    "LocationService",
    "TicketService",
    "AuthService",
]
