"""
py-datatable: in-memory relational data tables

Typed, mutable tables of rows and columns, grouped into datasets connected by
parent/child relations, with derived filtered/sorted views.

Main classes:
    - DataTable: columns + rows, search, sort, clone, schema diffing
    - DataColumn: typed field definition
    - DataRow: one record with change tracking (DataRowState)
    - DataSet: named tables plus DataRelations between their columns
    - DataView: read-only filtered/sorted projection of one table

Zero external dependencies - pure Python stdlib only.
"""

from .column import DataColumn
from .row import DataRow, DataRowState
from .collections import DataColumnCollection, DataRowCollection
from .table import DataTable
from .relation import DataRelation
from .dataset import DataSet
from .view import DataView
from .schema import SchemaDifferences, SchemaUpdateResult
from .errors import (
	DataTableError,
	DataTableKeyError,
	DataTableTypeError,
	DataTableValueError,
	DataTableIndexError,
	NotFoundError,
	DuplicateNameError,
	NullNotAllowedError,
	TypeCoercionError,
	IndexOutOfRangeError,
)

__version__ = "0.1.0"
__all__ = [
	"DataTable",
	"DataColumn",
	"DataRow",
	"DataRowState",
	"DataColumnCollection",
	"DataRowCollection",
	"DataRelation",
	"DataSet",
	"DataView",
	"SchemaDifferences",
	"SchemaUpdateResult",
	"DataTableError",
	"DataTableKeyError",
	"DataTableTypeError",
	"DataTableValueError",
	"DataTableIndexError",
	"NotFoundError",
	"DuplicateNameError",
	"NullNotAllowedError",
	"TypeCoercionError",
	"IndexOutOfRangeError",
]
