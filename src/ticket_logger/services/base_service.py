import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.i18n import DEFAULT_LOCALE, get_message

logger = logging.getLogger(__name__)


class BaseService:
    """
    Shared plumbing for services: the request session, the client locale and
    the transaction boundary. Repositories flush; services commit.
    """

    model_name: str = "Record"

    def __init__(self, db: AsyncSession, locale: str = DEFAULT_LOCALE):
        self.db = db
        self.locale = locale

    def msg(self, key: str) -> str:
        return get_message(key, self.locale)

    async def commit(self, operation: str) -> None:
        """Commit the unit of work; integrity failures are mapped like a flush failure."""
        async with db_error_handler(self.db, self.model_name, operation):
            await self.db.commit()
