"""
jujuconf/models/validator.py

Validation helper that checks arbitrary decoded JSON against a pydantic-based
type via TypeAdapter.
"""

from typing import Any, Type, TypeVar
from pydantic import ValidationError, TypeAdapter

T = TypeVar("T")


def validate_type(obj: Any, expected_type: Type[T]) -> T:
    """
    Validate `obj` against `expected_type` and return the validated value.

    Args:
        obj (Any): Decoded JSON (dicts, lists, scalars) to validate.
        expected_type (Type[T]): A pydantic model or any type TypeAdapter accepts.

    Returns:
        T: The validated object.

    Raises:
        ValueError: If validation fails. The pydantic error is chained.
    """
    try:
        return TypeAdapter(expected_type).validate_python(obj)
    except ValidationError as e:
        raise ValueError(
            f"Validation failed for {getattr(expected_type, '__name__', expected_type)}: "
            f"{e.error_count()} error(s): {e}"
        ) from e
