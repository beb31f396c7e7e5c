import weakref

from .typing import normalize_type


class DataColumn:
	""" Typed field definition within one DataTable """

	def __init__(self, column_name, data_type=None, allow_null=True, default_value=None):
		self.column_name = column_name
		self.data_type = data_type
		self.ordinal = -1
		self.allow_null = allow_null
		self.default_value = default_value
		self.caption = column_name
		self.expression = None
		self.read_only = False
		self.unique = False
		self.is_primary_key = False
		self._table_ref = None

	@property
	def data_type(self):
		return self._data_type

	@data_type.setter
	def data_type(self, value):
		self._data_type = normalize_type(value)

	@property
	def table(self):
		"""Owning DataTable, or None if the column is detached (or its table is gone)."""
		if self._table_ref is None:
			return None
		return self._table_ref()

	def _attach(self, table):
		self._table_ref = weakref.ref(table)

	def _detach(self):
		self._table_ref = None
		self.ordinal = -1

	def copy(self):
		"""Detached copy of this column's definition."""
		new_column = DataColumn(self.column_name, self._data_type, self.allow_null, self.default_value)
		new_column.caption = self.caption
		new_column.expression = self.expression
		new_column.read_only = self.read_only
		new_column.unique = self.unique
		new_column.is_primary_key = self.is_primary_key
		return new_column

	def __repr__(self):
		dt = self._data_type or "untyped"
		flags = ""
		if not self.allow_null:
			flags += " not null"
		if self.is_primary_key:
			flags += " pk"
		return f"DataColumn({self.column_name!r} <{dt}{flags}> #{self.ordinal})"
