"""Record Parsing — validates backend rows against their record type on receipt.

Invariants:
    - parse_rows/parse_row never return unvalidated dicts
    - A malformed row raises RecordValidationError naming the table
"""

from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from seminary_site.core.errors import RecordValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_rows(model: type[ModelT], rows, resource: str) -> list[ModelT]:
    if rows is None:
        return []
    try:
        return TypeAdapter(list[model]).validate_python(rows)
    except ValidationError as e:
        raise RecordValidationError(resource, _summary(e)) from e


def parse_row(model: type[ModelT], row, resource: str) -> ModelT:
    try:
        return model.model_validate(row)
    except ValidationError as e:
        raise RecordValidationError(resource, _summary(e)) from e


def _summary(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(loc) for loc in first["loc"])
    return f"{field}: {first['msg']} ({error.error_count()} error(s))"
