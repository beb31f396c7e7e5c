"""
Structural schema operations for DataTable.

A schema is a plain dict (JSON-ready apart from default values):

    {
        "table_name": str,
        "case_sensitive": bool,
        "columns": [{"name", "data_type", "allow_null", "default_value",
                     "expression", "read_only", "unique", "ordinal",
                     "caption"}, ...],
        "primary_key": [str, ...] or None,
        "unique_constraints": [{"columns": [str], "name": str}, ...],
    }

These are metadata operations: they never rewrite row values, except that
removing a column strips it from every row.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional
import json

from .errors import DataTableTypeError, DataTableValueError
from .typing import coerce_value


@dataclass(frozen=True)
class TypeMismatch:
    column: str
    this_type: Optional[str]
    other_type: Optional[str]


@dataclass(frozen=True)
class NullabilityDifference:
    column: str
    this_allow_null: bool
    other_allow_null: bool


@dataclass(frozen=True)
class ColumnModification:
    column: str
    change: str
    old: Any
    new: Any


@dataclass
class SchemaDifferences:
    """
    Differences between a table's schema and another table's schema.

    Attributes
    ----------
    missing_columns : list of str
        Columns the other table has and this one lacks
    extra_columns : list of str
        Columns this table has and the other one lacks
    type_mismatches : list of TypeMismatch
        Shared columns whose declared types differ
    nullability_differences : list of NullabilityDifference
        Shared columns whose allow_null flags differ
    """

    missing_columns: List[str] = field(default_factory=list)
    extra_columns: List[str] = field(default_factory=list)
    type_mismatches: List[TypeMismatch] = field(default_factory=list)
    nullability_differences: List[NullabilityDifference] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(
            self.missing_columns or self.extra_columns
            or self.type_mismatches or self.nullability_differences
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SchemaUpdateResult:
    """Change report of update_schema(); one list per phase."""

    added_columns: List[str] = field(default_factory=list)
    removed_columns: List[str] = field(default_factory=list)
    modified_columns: List[ColumnModification] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.added_columns or self.removed_columns or self.modified_columns)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def export_schema(table) -> Dict[str, Any]:
    """Describe a table's structure as a plain dict."""
    schema: Dict[str, Any] = {
        "table_name": table.table_name,
        "case_sensitive": table.case_sensitive,
        "columns": [],
        "primary_key": None,
        "unique_constraints": [],
    }

    for column in table.columns:
        schema["columns"].append({
            "name": column.column_name,
            "data_type": column.data_type,
            "allow_null": column.allow_null,
            "default_value": column.default_value,
            "expression": column.expression,
            "read_only": column.read_only,
            "unique": column.unique,
            "ordinal": column.ordinal,
            "caption": column.caption,
        })

        if column.is_primary_key:
            if schema["primary_key"] is None:
                schema["primary_key"] = []
            schema["primary_key"].append(column.column_name)
        elif column.unique:
            schema["unique_constraints"].append({
                "columns": [column.column_name],
                "name": f"UQ_{table.table_name}_{column.column_name}",
            })

    return schema


def import_schema(schema: Dict[str, Any]):
    """
    Build an empty DataTable from a schema dict.

    Primary-key columns are forced non-null and unique. Default values are
    coerced to the column type so a JSON round trip restores dates.
    """
    from .table import DataTable

    if not isinstance(schema, dict):
        raise DataTableTypeError(f"Schema must be a dict, got {type(schema).__name__}")
    if "columns" not in schema:
        raise DataTableValueError("Schema has no 'columns' entry")

    table = DataTable(schema.get("table_name", ""))
    table.case_sensitive = bool(schema.get("case_sensitive", False))
    primary_key = schema.get("primary_key") or []

    for column_def in schema["columns"]:
        name = column_def["name"]
        column = table.add_column(name, column_def.get("data_type"))
        column.allow_null = column_def.get("allow_null", True)
        default = column_def.get("default_value")
        column.default_value = coerce_value(default, column.data_type, name)
        column.expression = column_def.get("expression")
        column.read_only = column_def.get("read_only", False)
        column.unique = column_def.get("unique", False)
        column.caption = column_def.get("caption") or name

        if name in primary_key:
            column.is_primary_key = True
            column.allow_null = False
            column.unique = True

    return table


def compare_schema(table, other) -> SchemaDifferences:
    """Diff table's columns against other's (names, types, nullability)."""
    differences = SchemaDifferences()

    for column in table.columns:
        name = column.column_name
        if not other.column_exists(name):
            differences.extra_columns.append(name)
            continue

        other_column = other.columns.get(name)
        if column.data_type != other_column.data_type:
            differences.type_mismatches.append(
                TypeMismatch(name, column.data_type, other_column.data_type)
            )
        if column.allow_null != other_column.allow_null:
            differences.nullability_differences.append(
                NullabilityDifference(name, column.allow_null, other_column.allow_null)
            )

    for column in other.columns:
        if not table.column_exists(column.column_name):
            differences.missing_columns.append(column.column_name)

    return differences


def update_schema(table, source, add_missing: bool = True, remove_extra: bool = False) -> SchemaUpdateResult:
    """
    Reconcile table's schema toward source's.

    Runs three independent phases and reports each: add the columns source
    has and table lacks, drop the columns table has and source lacks, then
    copy declared type and nullability onto shared columns. Nothing is
    rolled back if a later phase fails.
    """
    result = SchemaUpdateResult()
    differences = compare_schema(table, source)

    if add_missing:
        for name in differences.missing_columns:
            new_column = source.columns.get(name).copy()
            new_column.is_primary_key = False
            table.add_column(new_column)
            result.added_columns.append(name)

    if remove_extra:
        for name in differences.extra_columns:
            table.remove_column(name)
            result.removed_columns.append(name)

    for mismatch in differences.type_mismatches:
        table.columns.get(mismatch.column).data_type = mismatch.other_type
        result.modified_columns.append(
            ColumnModification(mismatch.column, "data_type", mismatch.this_type, mismatch.other_type)
        )

    for diff in differences.nullability_differences:
        table.columns.get(diff.column).allow_null = diff.other_allow_null
        result.modified_columns.append(
            ColumnModification(diff.column, "allow_null", diff.this_allow_null, diff.other_allow_null)
        )

    return result


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def serialize_schema(table, **kwargs) -> str:
    """JSON text of export_schema(table); dates become ISO strings."""
    return json.dumps(export_schema(table), default=_json_default, **kwargs)


def deserialize_schema(text: str):
    """Inverse of serialize_schema()."""
    try:
        schema = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataTableValueError(f"Invalid schema JSON: {e}") from e
    return import_schema(schema)


__all__ = [
    "TypeMismatch", "NullabilityDifference", "ColumnModification",
    "SchemaDifferences", "SchemaUpdateResult",
    "export_schema", "import_schema", "compare_schema", "update_schema",
    "serialize_schema", "deserialize_schema",
]
