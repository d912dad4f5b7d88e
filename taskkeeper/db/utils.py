from collections.abc import Mapping
from typing import Any

from sqlalchemy import inspect


def apply_dict_updates(entity: object, update_data: Mapping[str, Any], excluded_attrs: set[str] | None) -> None:
    """
    Copies values from a mapping onto an ORM entity's column attributes.

    Relationships and unknown keys are never touched, so a payload cannot
    smuggle in attributes the table does not have.

    Args:
        entity: The SQLAlchemy ORM object being populated.
        update_data: Field names and values to set.
        excluded_attrs: Column names that must never come from the input
            (primary keys, ownership, audit columns).
    """
    excluded_attrs = excluded_attrs or set()
    columns = {attr.key for attr in inspect(entity).mapper.column_attrs}

    for key, value in update_data.items():
        if key in excluded_attrs or key not in columns:
            continue
        setattr(entity, key, value)
