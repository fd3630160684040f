from .common import APIModel, IdRef, LongText, Name
from .province import ProvinceSummary
from .supermarket import SupermarketRead


class LocationCreate(APIModel):
    address: LongText
    city: Name
    supermarket: IdRef
    province: IdRef


LocationUpdate = LocationCreate


class LocationRead(APIModel):
    id: int
    address: str
    city: str
    supermarket: SupermarketRead
    province: ProvinceSummary
