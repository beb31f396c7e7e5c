"""
Column data types for DataTable.

Pure metadata design:
  - A column's declared type is a short name ("number", "string",
    "boolean", "date") or None for an untyped column
  - Coercion happens on write, one scalar at a time
  - Comparison helpers back the table and view sort operations
"""

from __future__ import annotations
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Callable, Optional
import locale
import numbers

from .errors import DataTableValueError, TypeCoercionError


NUMBER = "number"
STRING = "string"
BOOLEAN = "boolean"
DATE = "date"

DATA_TYPES = (NUMBER, STRING, BOOLEAN, DATE)

# Python type → type name, for callers passing kinds instead of names
PYTHON_TYPE_TO_NAME = {
    int: NUMBER,
    float: NUMBER,
    Decimal: NUMBER,
    str: STRING,
    bool: BOOLEAN,
    date: DATE,
    datetime: DATE,
}


def normalize_type(data_type: Any) -> Optional[str]:
    """
    Normalize a declared column type to its canonical name.

    Parameters
    ----------
    data_type : str, type or None
        Type name (case-insensitive) or a Python type alias

    Returns
    -------
    str or None
        One of DATA_TYPES, or None for an untyped column

    Examples
    --------
    >>> normalize_type("Number")
    'number'
    >>> normalize_type(str)
    'string'
    >>> normalize_type(None) is None
    True
    """
    if data_type is None:
        return None
    if isinstance(data_type, type):
        name = PYTHON_TYPE_TO_NAME.get(data_type)
        if name is None:
            raise DataTableValueError(
                f"Unsupported column type {data_type.__name__!r}"
            )
        return name
    if isinstance(data_type, str):
        name = data_type.strip().lower()
        if name in DATA_TYPES:
            return name
    raise DataTableValueError(
        f"Unknown column type {data_type!r}; expected one of {', '.join(DATA_TYPES)}"
    )


def _coerce_number(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (numbers.Real, Decimal)):
        if value != value:
            raise ValueError("NaN")
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            result = float(text)
            if result != result:
                raise ValueError("NaN")
            return result
    raise TypeError(type(value).__name__)


def _coerce_date(value: Any) -> Any:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    raise TypeError(type(value).__name__)


def coerce_value(value: Any, data_type: Optional[str], column_name: str = "") -> Any:
    """
    Coerce a non-null scalar to a column's declared type.

    Parameters
    ----------
    value : Any
        Scalar about to be written
    data_type : str or None
        Canonical type name; None stores the value unchanged
    column_name : str
        Used in error messages only

    Returns
    -------
    Any
        Coerced scalar

    Raises
    ------
    TypeCoercionError
        If a number or date column receives a value it cannot represent
    """
    if value is None or data_type is None:
        return value

    if data_type == NUMBER:
        try:
            return _coerce_number(value)
        except (TypeError, ValueError, OverflowError):
            raise TypeCoercionError(
                f"Value {value!r} cannot be converted to number for column '{column_name}'"
            ) from None

    if data_type == DATE:
        try:
            return _coerce_date(value)
        except (TypeError, ValueError, OverflowError, OSError):
            raise TypeCoercionError(
                f"Value {value!r} cannot be converted to date for column '{column_name}'"
            ) from None

    if data_type == STRING:
        return value if isinstance(value, str) else str(value)

    if data_type == BOOLEAN:
        return value if isinstance(value, bool) else bool(value)

    return value


def infer_data_type(value: Any) -> Optional[str]:
    """
    Infer a column type name from a single runtime value.

    None defaults to string. Values of no known kind yield None (untyped).
    """
    if value is None:
        return STRING
    # Check bool BEFORE int (bool is subclass of int)
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (numbers.Real, Decimal)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, date):
        return DATE
    return None


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without cross-kind coercion: True never equals 1."""
    if isinstance(a, bool) is not isinstance(b, bool):
        return False
    try:
        return bool(a == b)
    except TypeError:
        return False


def to_timestamp(value: Any) -> float:
    """Seconds since the epoch; naive datetimes and dates are read as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return _coerce_date(value).timestamp()


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal))


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def compare_strings(a: Any, b: Any) -> int:
    """Locale-aware comparison of the string forms of a and b."""
    ka = locale.strxfrm(str(a))
    kb = locale.strxfrm(str(b))
    return (ka > kb) - (ka < kb)


def compare_typed(a: Any, b: Any, data_type: Optional[str]) -> int:
    """
    Compare two non-null values under a column's declared type.

    number compares numerically, date by timestamp, everything else by
    locale-aware string comparison. Values that no longer fit the type
    (e.g. after a schema change) fall back to string comparison.
    """
    if data_type == NUMBER:
        if _is_number(a) and _is_number(b):
            return (a > b) - (a < b)
        try:
            return _sign(float(a) - float(b))
        except (TypeError, ValueError, OverflowError):
            return compare_strings(a, b)
    if data_type == DATE:
        try:
            return _sign(to_timestamp(a) - to_timestamp(b))
        except (TypeError, ValueError, OverflowError, OSError):
            return compare_strings(a, b)
    return compare_strings(a, b)


def compare_values(a: Any, b: Any) -> int:
    """Natural ordering of two non-null values (a < b → -1)."""
    try:
        if a < b:
            return -1
        if b < a:
            return 1
        return 0
    except TypeError:
        return compare_strings(a, b)


def nulls_last(compare: Callable[[Any, Any], int]) -> Callable[[Any, Any], int]:
    """Wrap a comparison so None sorts after every value, before any direction is applied."""
    def wrapped(a, b):
        if a is None and b is None:
            return 0
        if a is None:
            return 1
        if b is None:
            return -1
        return compare(a, b)
    return wrapped


def sort_direction(order: Any) -> int:
    """Map 'asc'/'desc' to 1/-1."""
    text = str(order).lower() if order is not None else "asc"
    if text == "asc":
        return 1
    if text == "desc":
        return -1
    raise DataTableValueError(f"Invalid sort order {order!r}; expected 'asc' or 'desc'")


__all__ = [
    "NUMBER", "STRING", "BOOLEAN", "DATE", "DATA_TYPES",
    "normalize_type", "coerce_value", "infer_data_type", "strict_equals",
    "to_timestamp", "compare_strings", "compare_typed", "compare_values",
    "nulls_last", "sort_direction",
]
