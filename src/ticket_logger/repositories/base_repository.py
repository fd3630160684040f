"""
Base repository class providing common database operations.

Model-specific repositories inherit from `BaseRepository` to reuse the generic
CRUD logic and add their own queries (existence checks, cascade deletes, search).

Repositories only `flush()`. Committing is the job of the service layer, so a
service can batch several repository calls (e.g. a cascade) into one transaction.
"""
from ticket_logger.exceptions.base import (
    ConflictError,
    NotFoundError,
    InvalidFieldError,
    ValidationError,
)

from ticket_logger.exceptions.mapper import db_error_handler
from ticket_logger.validators.exception_validators import (
    find_unknown_model_kwargs,
    find_unique_conflicts,
    missing_required,
)

import time
from typing import TypeVar, Generic, Type, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
import logging

from ticket_logger.database.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

SORT_DIRECTIONS = {"asc", "desc"}


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: the model class itself (e.g. Region, not Region()), used to build queries.
            db: the async session injected by the request dependency.
        """
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Validate and insert an entity.

        - INFO: expected domain errors (unknown fields, missing required, duplicate).
        - INFO: success event with created id and duration_ms.
        - EXCEPTION: unexpected errors with stack trace (through db_error_handler).

        Raises:
            InvalidFieldError: kwargs that are not mapped attributes.
            ValidationError: required columns missing or None.
            ConflictError: a unique column set already has the value.
        """
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "operation": "create", "provided_keys": sorted(kwargs)},
        )

        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": self.model_name, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        missing = missing_required(self.model, kwargs)
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": self.model_name, "operation": "create", "missing_fields": sorted(missing)},
            )
            raise ValidationError(f"Missing required field(s): {', '.join(missing)} for {self.model_name}", fields=missing)

        # best-effort; the UNIQUE constraint still decides at flush time
        conflicts = await find_unique_conflicts(self.db, self.model, kwargs)
        if conflicts:
            logger.info(
                "repo.create.duplicate_precheck",
                extra={"model": self.model_name, "operation": "create", "conflict_fields": sorted(conflicts)},
            )
            raise ConflictError(
                f"{self.model_name} already exists for field(s): {', '.join(sorted(conflicts))}",
                fields=sorted(conflicts),
            )

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name, "create"):
            entity = self.model(**kwargs)
            self.db.add(entity)
            await self.db.flush()
            # reload so eager relationships (region, products) are populated
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return the entity with this id, or None."""
        async with db_error_handler(self.db, self.model_name, "retrieve"):
            result = await self.db.execute(select(self.model).where(self.model.id == entity_id))
            entity = result.scalar_one_or_none()
        logger.debug("repo.get_by_id", extra={"model": self.model_name, "id": entity_id, "found": entity is not None})
        return entity

    async def get_by_id_or_raise(self, entity_id: int, message: str | None = None) -> ModelType:
        """
        Get an entity by its ID or raise NotFoundError.

        `message` overrides the default (services pass a localised one).
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            logger.info("repo.not_found", extra={"model": self.model_name, "id": entity_id})
            raise NotFoundError(message or f"{self.model_name} with ID {entity_id} not found")
        return entity

    def _order_clause(self, sort: str | None):
        """
        Translate "field" / "field,asc" / "field,desc" into an ORDER BY clause.

        Unknown fields fall back to `id` with a warning.
        """
        if not sort:
            return self.model.id.asc()

        field, _, direction = sort.partition(",")
        field = field.strip()
        direction = (direction.strip().lower() or "asc")
        if direction not in SORT_DIRECTIONS:
            direction = "asc"

        column = getattr(self.model, field, None)
        if column is None or field not in {c.key for c in self.model.__mapper__.column_attrs}:
            logger.warning("repo.order_by.ignored", extra={"model": self.model_name, "order_by": field})
            return self.model.id.asc()
        return column.desc() if direction == "desc" else column.asc()

    async def get_all(self, offset: int = 0, limit: int | None = None, sort: str | None = None) -> list[ModelType]:
        """All entities ordered by `sort` (default: id ascending)."""
        async with db_error_handler(self.db, self.model_name, "list"):
            query = select(self.model).order_by(self._order_clause(sort)).offset(offset)
            if limit is not None:
                query = query.limit(limit)
            result = await self.db.execute(query)
            entities = list(result.scalars().all())
        logger.debug("repo.get_all", extra={"model": self.model_name, "count": len(entities)})
        return entities

    async def get_page(self, page: int = 0, size: int = 20, sort: str | None = None) -> tuple[list[ModelType], int]:
        """
        Zero-based page of entities plus the total row count.
        """
        total = await self.count()
        items = await self.get_all(offset=page * size, limit=size, sort=sort)
        return items, total

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, entity_id: int, **kwargs) -> ModelType:
        """
        Set the given attributes on the entity and flush.

        None values are skipped (partial update). Unique pre-checks ignore the row itself.

        Raises:
            NotFoundError: no entity with this id.
            InvalidFieldError: unknown attributes.
            ConflictError: another row already holds a unique value.
        """
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        entity = await self.get_by_id_or_raise(entity_id)
        update_data = {k: v for k, v in kwargs.items() if v is not None}
        if not update_data:
            logger.warning("repo.update.no_data", extra={"model": self.model_name, "id": entity_id})
            return entity

        conflicts = await find_unique_conflicts(self.db, self.model, update_data, exclude_id=entity_id)
        if conflicts:
            logger.info(
                "repo.update.duplicate_precheck",
                extra={"model": self.model_name, "operation": "update", "conflict_fields": sorted(conflicts)},
            )
            raise ConflictError(
                f"{self.model_name} already exists for field(s): {', '.join(sorted(conflicts))}",
                fields=sorted(conflicts),
            )

        async with db_error_handler(self.db, self.model_name, "update"):
            for key, value in update_data.items():
                setattr(entity, key, value)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info(
            "repo.update.success",
            extra={"model": self.model_name, "operation": "update", "id": entity_id, "updated_keys": sorted(update_data)},
        )
        return entity

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, entity_id: int) -> bool:
        """
        Delete a single row by id. Returns False when nothing was deleted.

        Dependent rows are not touched; use the subclass `delete_cascade` for aggregates.
        """
        async with db_error_handler(self.db, self.model_name, "delete"):
            result = await self.db.execute(delete(self.model).where(self.model.id == entity_id))

        if result.rowcount > 0:
            logger.info("repo.delete.success", extra={"model": self.model_name, "operation": "delete", "id": entity_id})
            return True
        logger.warning("repo.delete.not_found", extra={"model": self.model_name, "operation": "delete", "id": entity_id})
        return False

    # =================================================================================================================
    # Utility
    # =================================================================================================================

    async def exists(self, entity_id: int) -> bool:
        async with db_error_handler(self.db, self.model_name, "exists"):
            result = await self.db.execute(select(self.model.id).where(self.model.id == entity_id))
            return result.scalar() is not None

    async def count(self, **filters: Any) -> int:
        """
        Count entities, optionally filtered by equality (e.g. region_id=1).
        """
        query = select(func.count(self.model.id))
        for field, value in filters.items():
            if not hasattr(self.model, field):
                raise InvalidFieldError(f"{self.model_name} has no field '{field}'", fields=[field])
            query = query.where(getattr(self.model, field) == value)

        async with db_error_handler(self.db, self.model_name, "count"):
            result = await self.db.execute(query)
            return result.scalar() or 0
