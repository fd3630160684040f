from .common import APIModel, Name


class ProductCreate(APIModel):
    """Body of "add new product to ticket": {"name": "Milk"}."""

    name: Name


class ProductRead(APIModel):
    id: int
    name: str
