from .common import APIModel, Code, IdRef, Name
from .region import RegionSummary


class ProvinceCreate(APIModel):
    """
    Payload for create and full update:

        {"code": "23", "name": "Jaén", "region": {"id": 1}}
    """

    code: Code
    name: Name
    region: IdRef


ProvinceUpdate = ProvinceCreate


class ProvinceSummary(APIModel):
    id: int
    code: str
    name: str


class ProvinceRead(ProvinceSummary):
    region: RegionSummary
