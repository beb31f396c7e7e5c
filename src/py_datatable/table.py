import warnings
from collections.abc import Mapping
from functools import cmp_to_key

from .collections import DataColumnCollection, DataRowCollection
from .criteria import compile_criteria
from .errors import DataTableTypeError, NotFoundError
from .row import DataRow
from . import schema as _schema
from .typing import (
	compare_typed,
	compare_values,
	infer_data_type,
	nulls_last,
	sort_direction,
)


def _missing_col_error(name, context="DataTable"):
	return NotFoundError(f"Column '{name}' not found in {context}")


class DataTable:
	""" Typed, mutable rows and columns held in memory """

	def __init__(self, table_name=''):
		self.table_name = table_name
		# rows first: adding a column back-fills existing rows
		self.rows = DataRowCollection(self)
		self.columns = DataColumnCollection(self)
		self.case_sensitive = False

	#-----------------------------------------------------
	# Columns
	#-----------------------------------------------------

	def add_column(self, column_or_name, data_type=None):
		"""Add a column (DataColumn or name); returns the DataColumn."""
		return self.columns.add(column_or_name, data_type)

	def remove_column(self, column_name):
		self.columns.remove(column_name)

	def column_exists(self, column_name):
		return self.columns.contains(column_name)

	@property
	def primary_key(self):
		"""Names of the primary-key columns, in ordinal order."""
		return [col.column_name for col in self.columns if col.is_primary_key]

	@primary_key.setter
	def primary_key(self, names):
		if names is None:
			names = []
		elif isinstance(names, str):
			names = [names]
		key_columns = []
		for name in names:
			if not self.columns.contains(name):
				raise _missing_col_error(name)
			key_columns.append(self.columns.get(name))
		for col in self.columns:
			col.is_primary_key = False
		for col in key_columns:
			col.is_primary_key = True
			col.allow_null = False
			col.unique = True

	#-----------------------------------------------------
	# Rows
	#-----------------------------------------------------

	def new_row(self):
		"""Detached row of this table, filled with column defaults."""
		return DataRow(self)

	def add_row(self, values):
		"""
		Append a row.

		Args:
			values: DataRow of this table, sequence of values in column
			        order, or mapping of column name to value

		Returns:
			The appended DataRow
		"""
		return self.rows.add(values)

	def remove_row(self, index):
		"""Remove the row at index; out-of-range indices are ignored."""
		self.rows.remove_at(index)

	def clear(self):
		"""Remove every row; columns are kept."""
		self.rows.clear()

	def accept_changes(self):
		"""Checkpoint every row (UNCHANGED, no original values)."""
		for row in self.rows:
			row.accept_changes()
		return self

	@property
	def count(self):
		return len(self.rows)

	def __len__(self):
		return len(self.rows)

	def __iter__(self):
		return iter(self.rows)

	def __repr__(self):
		from .display import _printr
		return _printr(self)

	#-----------------------------------------------------
	# Queries
	#-----------------------------------------------------

	def find_rows(self, criteria):
		"""
		Rows matching criteria, in table order.

		Args:
			criteria: callable taking a DataRow, or a mapping of column name
			          to a value, a compiled regex, or an operator mapping
			          ({'$gt': 5}, {'$in': [1, 2]}, {'$contains': 'x'}, ...).
			          All entries must match.
		"""
		matches = compile_criteria(criteria)
		return [row for row in self.rows if matches(row)]

	def find_one(self, criteria):
		"""First row matching criteria, or None."""
		matches = compile_criteria(criteria)
		for row in self.rows:
			if matches(row):
				return row
		return None

	def select(self, criteria=None):
		"""Plain dict snapshots of the matching rows (all rows if criteria is None)."""
		if criteria is None:
			return [row.to_dict() for row in self.rows]
		return [row.to_dict() for row in self.find_rows(criteria)]

	#-----------------------------------------------------
	# Sorting (in place, returns self for chaining)
	#-----------------------------------------------------

	def sort(self, column_name_or_comparer, order='asc'):
		"""
		Sort rows in place by one column or with a comparator.

		With a column name, None sorts last in either direction and values
		compare by the column's declared type. A comparator is called as
		comparer(row_a, row_b) and must return a negative, zero or positive
		number; it controls null handling itself.
		"""
		if callable(column_name_or_comparer):
			self.rows._sort(cmp_to_key(column_name_or_comparer))
			return self

		name = column_name_or_comparer
		if not self.columns.contains(name):
			raise _missing_col_error(name)
		data_type = self.columns.get(name).data_type
		direction = sort_direction(order)

		compare = nulls_last(lambda a, b: direction * compare_typed(a, b, data_type))
		self.rows._sort(cmp_to_key(lambda a, b: compare(a._values[name], b._values[name])))
		return self

	def sort_by(self, expression):
		"""
		Sort rows in place by a derived key, expression(row).

		The key is recomputed on every comparison. None keys sort last.
		"""
		if not callable(expression):
			raise DataTableTypeError("sort_by expects a callable taking a DataRow")
		compare = nulls_last(compare_values)
		self.rows._sort(cmp_to_key(lambda a, b: compare(expression(a), expression(b))))
		return self

	def _normalize_sort_criteria(self, criteria):
		normalized = []
		for criterion in criteria:
			if isinstance(criterion, str):
				name, order = criterion, 'asc'
			elif isinstance(criterion, Mapping):
				name, order = criterion.get('column'), criterion.get('order', 'asc')
			elif isinstance(criterion, (tuple, list)) and len(criterion) in (1, 2):
				name, order = criterion[0], criterion[1] if len(criterion) == 2 else 'asc'
			else:
				raise DataTableTypeError(f"Invalid sort criterion {criterion!r}")
			if not self.columns.contains(name):
				raise _missing_col_error(name)
			normalized.append((name, sort_direction(order)))
		return normalized

	def sort_multiple(self, *criteria):
		"""
		Sort rows in place by several columns.

		Each criterion is {'column': name, 'order': 'asc'|'desc'}, a
		(name, order) tuple, or a bare name (ascending). The first criterion
		that tells two rows apart decides; None sorts last per criterion.
		"""
		normalized = self._normalize_sort_criteria(criteria)

		def compare(a, b):
			for name, direction in normalized:
				va = a._values[name]
				vb = b._values[name]
				if va is None and vb is None:
					continue
				if va is None:
					return 1
				if vb is None:
					return -1
				result = compare_values(va, vb)
				if result:
					return direction * result
			return 0

		self.rows._sort(cmp_to_key(compare))
		return self

	#-----------------------------------------------------
	# Copying
	#-----------------------------------------------------

	def _copy_structure(self):
		new_table = DataTable(self.table_name)
		for col in self.columns:
			new_table.add_column(col.copy())
		new_table.case_sensitive = self.case_sensitive
		return new_table

	def _adopt_rows(self, rows, deep=False):
		"""Append copies of rows from a structurally identical table, keeping their state."""
		for row in rows:
			new_row = self.new_row()
			new_row._copy_state_from(row, deep=deep)
			self.rows.add(new_row)
		return self

	def clone(self):
		"""Independent copy of the columns and every row (values, original values, state)."""
		return self._copy_structure()._adopt_rows(self.rows, deep=True)

	#-----------------------------------------------------
	# Query results
	#-----------------------------------------------------

	def load_from_query(self, records):
		"""
		Replace this table's contents with a sequence of uniform records.

		Columns come from the first record's keys, typed by its values (None
		becomes string). Keys not present in the first record are ignored.
		"""
		records = list(records)
		if not records:
			return self

		for record in records:
			if not isinstance(record, Mapping):
				raise DataTableTypeError(
					f"Query records must be mappings, got {type(record).__name__}"
				)

		self.clear()
		for name in self.columns.names():
			self.remove_column(name)

		first = records[0]
		for name, value in first.items():
			self.add_column(name, infer_data_type(value))

		ignored = set()
		for record in records:
			ignored.update(key for key in record if key not in first)
			self.add_row(record)

		if ignored:
			warnings.warn(
				f"Ignoring keys not present in the first record: {', '.join(sorted(map(str, ignored)))}",
				stacklevel=2,
			)
		return self

	async def load_from_query_async(self, query):
		"""Await query (records) and load the result."""
		results = await query
		return self.load_from_query(results)

	#-----------------------------------------------------
	# Schema
	#-----------------------------------------------------

	def export_schema(self):
		return _schema.export_schema(self)

	@staticmethod
	def import_schema(schema):
		return _schema.import_schema(schema)

	def compare_schema(self, other_table):
		return _schema.compare_schema(self, other_table)

	def update_schema(self, source_table, add_missing=True, remove_extra=False):
		return _schema.update_schema(self, source_table, add_missing, remove_extra)

	def serialize_schema(self, **kwargs):
		return _schema.serialize_schema(self, **kwargs)

	@staticmethod
	def deserialize_schema(schema_json):
		return _schema.deserialize_schema(schema_json)
