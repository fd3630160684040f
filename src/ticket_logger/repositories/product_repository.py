import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.models.product import Product
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository[Product]):

    def __init__(self, db: AsyncSession):
        super().__init__(Product, db)

    async def search_by_name(self, query: str) -> list[Product]:
        """
        Products whose name contains `query`, case-insensitive.

        `%` and `_` in the query are matched literally.
        """
        async with db_error_handler(self.db, self.model_name, "search"):
            result = await self.db.execute(
                select(Product)
                .where(Product.name.icontains(query, autoescape=True))
                .order_by(Product.id)
            )
            products = list(result.scalars().all())

        logger.debug("repo.product.search", extra={"model": self.model_name, "hits": len(products)})
        return products

    async def get_many(self, product_ids: list[int]) -> list[Product]:
        """Products for the given ids (missing ids are simply absent from the result)."""
        if not product_ids:
            return []
        async with db_error_handler(self.db, self.model_name, "get_many"):
            result = await self.db.execute(select(Product).where(Product.id.in_(product_ids)))
            return list(result.scalars().all())
