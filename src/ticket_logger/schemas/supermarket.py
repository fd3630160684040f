from .common import APIModel, Name


class SupermarketCreate(APIModel):
    name: Name


SupermarketUpdate = SupermarketCreate


class SupermarketRead(APIModel):
    id: int
    name: str
