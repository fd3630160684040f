from .common import APIModel, ErrorResponse, FieldErrorModel, IdRef, Page
from .region import RegionForm, RegionRead, RegionSummary
from .province import ProvinceCreate, ProvinceRead, ProvinceSummary, ProvinceUpdate
from .supermarket import SupermarketCreate, SupermarketRead, SupermarketUpdate
from .location import LocationCreate, LocationRead, LocationUpdate
from .product import ProductCreate, ProductRead
from .ticket import TicketCreate, TicketRead, TicketUpdate
from .auth import HomeResponse, LoginInfo, LoginRequest, LoginResponse

__all__ = [
    "APIModel",
    "ErrorResponse",
    "FieldErrorModel",
    "IdRef",
    "Page",
    "RegionForm",
    "RegionRead",
    "RegionSummary",
    "ProvinceCreate",
    "ProvinceRead",
    "ProvinceSummary",
    "ProvinceUpdate",
    "SupermarketCreate",
    "SupermarketRead",
    "SupermarketUpdate",
    "LocationCreate",
    "LocationRead",
    "LocationUpdate",
    "ProductCreate",
    "ProductRead",
    "TicketCreate",
    "TicketRead",
    "TicketUpdate",
    "HomeResponse",
    "LoginInfo",
    "LoginRequest",
    "LoginResponse",
]
