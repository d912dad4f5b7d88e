from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from taskkeeper.exceptions.http import ValidationError

T = TypeVar("T", bound=BaseModel)


def coerce_input(schema: type[T], data: T | Mapping[str, Any]) -> T:
    """
    Accepts a ready schema instance or a plain mapping for it.
    Mapping input is validated here so malformed data is rejected with the
    domain ValidationError before anything reaches a repository.
    """
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'input'}: {err['msg']}" for err in exc.errors()
        )
        raise ValidationError(details) from exc
