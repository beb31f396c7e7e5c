from collections.abc import Mapping

from .column import DataColumn
from .row import DataRow
from .errors import (
	DataTableTypeError,
	DataTableValueError,
	DuplicateNameError,
	IndexOutOfRangeError,
	NotFoundError,
)


class DataColumnCollection:
	""" Ordered, uniquely named columns of one table """

	def __init__(self, table):
		self._table = table
		self._columns = {}

	def add(self, column_or_name, data_type=None):
		"""
		Add a column and back-fill its default value into every existing row.

		Args:
			column_or_name: DataColumn instance or name of the column to create
			data_type: Declared type (only used when a name is given)

		Returns:
			The added DataColumn

		Raises:
			DuplicateNameError: If a column with the same name already exists
			DataTableValueError: If the column already belongs to another table
		"""
		if isinstance(column_or_name, DataColumn):
			column = column_or_name
			owner = column.table
			if owner is not None and owner is not self._table:
				raise DataTableValueError(
					f"Column '{column.column_name}' already belongs to table '{owner.table_name}'"
				)
		elif isinstance(column_or_name, str):
			column = DataColumn(column_or_name, data_type)
		else:
			raise DataTableTypeError(
				f"Expected DataColumn or column name, got {type(column_or_name).__name__}"
			)

		if column.column_name in self._columns:
			raise DuplicateNameError(f"Column '{column.column_name}' already exists")

		column._attach(self._table)
		column.ordinal = len(self._columns)
		self._columns[column.column_name] = column

		for row in self._table.rows:
			row._values[column.column_name] = column.default_value

		return column

	def remove(self, column_name):
		"""
		Remove a column, strip it from every row and renumber the ordinals.

		Raises:
			NotFoundError: If the column does not exist
		"""
		if column_name not in self._columns:
			raise NotFoundError(f"Column '{column_name}' does not exist")

		column = self._columns.pop(column_name)
		column._detach()

		for row in self._table.rows:
			row._values.pop(column_name, None)
			row._original_values.pop(column_name, None)

		for ordinal, col in enumerate(self._columns.values()):
			col.ordinal = ordinal

	def contains(self, column_name):
		try:
			return column_name in self._columns
		except TypeError:
			return False

	def get(self, column_name):
		"""Column by name (raises NotFoundError)."""
		try:
			return self._columns[column_name]
		except (KeyError, TypeError):
			raise NotFoundError(f"Column '{column_name}' does not exist") from None

	def at(self, index):
		"""Column by ordinal (raises NotFoundError)."""
		if not 0 <= index < len(self._columns):
			raise NotFoundError(f"Column at index {index} does not exist")
		return list(self._columns.values())[index]

	def names(self):
		return list(self._columns)

	@property
	def count(self):
		return len(self._columns)

	def __len__(self):
		return len(self._columns)

	def __contains__(self, column_name):
		return self.contains(column_name)

	def __iter__(self):
		return iter(list(self._columns.values()))

	def __repr__(self):
		return f"DataColumnCollection({self.names()!r})"


class DataRowCollection:
	""" Ordered rows of one table """

	def __init__(self, table):
		self._table = table
		self._rows = []

	def _build_row(self, values):
		row = DataRow(self._table)
		if isinstance(values, Mapping):
			columns = self._table.columns
			for key, value in values.items():
				if columns.contains(key):
					row._assign(key, value)
		elif isinstance(values, (list, tuple)):
			for column, value in zip(self._table.columns, values):
				row._assign(column.column_name, value)
		else:
			raise DataTableTypeError(
				f"Row values must be a DataRow, sequence or mapping, got {type(values).__name__}"
			)
		return row

	def add(self, row):
		"""
		Append a row.

		Args:
			row: DataRow of this table, sequence of values in column order,
			     or mapping of column name to value (unknown keys are ignored)

		Returns:
			The appended DataRow
		"""
		if isinstance(row, DataRow):
			if row.table is not self._table:
				raise DataTableValueError("Row belongs to a different table")
			# detached rows miss column changes made since new_row()
			row._sync_columns()
		else:
			row = self._build_row(row)

		self._rows.append(row)
		return row

	def remove(self, row):
		"""Remove a row instance; absent rows are ignored."""
		for i, existing in enumerate(self._rows):
			if existing is row:
				del self._rows[i]
				return

	def remove_at(self, index):
		"""Remove by position; out-of-range indices are ignored."""
		if 0 <= index < len(self._rows):
			del self._rows[index]

	def clear(self):
		self._rows = []

	def at(self, index):
		"""Row by position (raises IndexOutOfRangeError)."""
		if not 0 <= index < len(self._rows):
			raise IndexOutOfRangeError(f"Index {index} out of range [0, {len(self._rows) - 1}]")
		return self._rows[index]

	def index_of(self, row):
		"""Position of a row instance, or -1."""
		for i, existing in enumerate(self._rows):
			if existing is row:
				return i
		return -1

	def _snapshot(self):
		return list(self._rows)

	def _sort(self, key):
		self._rows.sort(key=key)

	@property
	def count(self):
		return len(self._rows)

	def __len__(self):
		return len(self._rows)

	def __iter__(self):
		return iter(list(self._rows))

	def __repr__(self):
		return f"DataRowCollection({len(self._rows)} rows)"
