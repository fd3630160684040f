from typing import Iterable

from sqlalchemy import UniqueConstraint, and_, inspect as sa_inspect, select


def _attribute_key(model, column) -> str:
    # Region.image_path is stored in column "image": callers always use the attribute key
    return sa_inspect(model).get_property_by_column(column).key


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return the kwarg keys that are not mapped attributes (columns or relationships) of `model`.
    """
    allowed = {attr.key for attr in sa_inspect(model).attrs}
    return [k for k in kwargs if k not in allowed]


def get_required_columns(model) -> list[str]:
    """
    Attribute keys of columns that are NOT NULL, have no client/server default
    and are not autoincrement primary keys.
    """
    required = []
    for col in model.__table__.columns:
        has_default = col.default is not None or col.server_default is not None
        is_auto_pk = col.primary_key and col.autoincrement in (True, "auto")
        if not col.nullable and not has_default and not is_auto_pk:
            required.append(_attribute_key(model, col))
    return required


def get_unique_column_sets(model) -> list[list[str]]:
    """
    Unique attribute-key sets declared on the table: Column(unique=True),
    UniqueConstraint and unique Index.
    """
    table = model.__table__
    unique_sets: list[list[str]] = []

    for col in table.columns:
        if col.unique:
            unique_sets.append([_attribute_key(model, col)])

    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint):
            keys = [_attribute_key(model, c) for c in constraint.columns]
            if keys not in unique_sets:
                unique_sets.append(keys)

    for idx in table.indexes:
        if idx.unique:
            keys = [_attribute_key(model, c) for c in idx.columns]
            if keys not in unique_sets:
                unique_sets.append(keys)

    return unique_sets


async def find_unique_conflicts(db, model, kwargs: dict, exclude_id: int | None = None) -> set[str]:
    """
    Query for existing rows that would violate a unique set given `kwargs`.

    `exclude_id` ignores the row being updated, so keeping its own value is not a conflict.
    Returns the conflicting attribute keys (best-effort; the DB constraint stays authoritative).
    """
    conflicts: set[str] = set()

    for cols in get_unique_column_sets(model):
        if not all(c in kwargs and kwargs[c] is not None for c in cols):
            continue

        conditions = [getattr(model, c) == kwargs[c] for c in cols]
        if exclude_id is not None:
            conditions.append(model.id != exclude_id)

        q = select(model.id).where(and_(*conditions)).limit(1)
        res = await db.execute(q)
        if res.scalar_one_or_none() is not None:
            conflicts.update(cols)

    return conflicts


def missing_required(model, kwargs: dict, required: Iterable[str] | None = None) -> list[str]:
    """Required attribute keys that are absent or None in `kwargs`."""
    keys = required if required is not None else get_required_columns(model)
    return [k for k in keys if kwargs.get(k) is None]
