import json
import warnings
from copy import deepcopy
from enum import Enum

from .errors import NotFoundError, NullNotAllowedError
from .typing import coerce_value


class DataRowState(str, Enum):
	"""Pending-change status of a row (not persistence status)."""
	ADDED = 'ADDED'
	MODIFIED = 'MODIFIED'
	DELETED = 'DELETED'
	UNCHANGED = 'UNCHANGED'

	@classmethod
	def is_changed(cls, state):
		return state in (cls.ADDED, cls.MODIFIED, cls.DELETED)

	@classmethod
	def is_unchanged(cls, state):
		return state == cls.UNCHANGED


class DataRow:
	""" One record of a DataTable, with change tracking """

	def __init__(self, table):
		self._table = table
		self._values = {col.column_name: col.default_value for col in table.columns}
		self._original_values = {}
		self._row_state = DataRowState.ADDED

	@property
	def table(self):
		return self._table

	@property
	def values(self):
		"""Snapshot of the current values keyed by column name."""
		return dict(self._values)

	@property
	def original_values(self):
		"""Values held before the first write to each column since the last checkpoint."""
		return dict(self._original_values)

	@property
	def state(self):
		return self._row_state

	@property
	def has_changes(self):
		return DataRowState.is_changed(self._row_state)

	def _resolve_name(self, key):
		columns = self._table.columns
		if isinstance(key, int) and not isinstance(key, bool):
			if 0 <= key < len(columns):
				return columns.at(key).column_name
			raise NotFoundError(f"Column at index {key} does not exist")
		if not columns.contains(key):
			raise NotFoundError(f"Column '{key}' does not exist")
		return key

	def get(self, key):
		"""
		Value of a column by name or zero-based position.

		Raises:
			NotFoundError: If the key does not resolve to a current column
		"""
		return self._values[self._resolve_name(key)]

	def item(self, key):
		"""Alias for get()."""
		return self.get(key)

	def _validate(self, column_name, value):
		if not self._table.columns.contains(column_name):
			raise NotFoundError(f"Column '{column_name}' does not exist")
		column = self._table.columns.get(column_name)
		if value is None:
			if not column.allow_null:
				raise NullNotAllowedError(f"Column '{column_name}' does not allow null values")
			return None
		return coerce_value(value, column.data_type, column_name)

	def _assign(self, column_name, value):
		"""Validated write without change tracking (row construction)."""
		self._values[column_name] = self._validate(column_name, value)

	def set(self, column_name, value):
		"""
		Write a value, coercing it to the column's declared type.

		The first write to a column since the last checkpoint records its
		previous value in original_values. Every successful write marks the
		row MODIFIED, including rows still in the ADDED state.

		Raises:
			NotFoundError: If the column does not exist
			NullNotAllowedError: If value is None and the column disallows nulls
			TypeCoercionError: If value cannot be converted to the column type
		"""
		value = self._validate(column_name, value)

		if self._table.columns.get(column_name).read_only:
			warnings.warn(f"Writing to read-only column '{column_name}'", stacklevel=2)

		if column_name not in self._original_values:
			self._original_values[column_name] = self._values[column_name]

		self._values[column_name] = value
		self._row_state = DataRowState.MODIFIED

	def accept_changes(self):
		"""Make the current values the clean checkpoint."""
		self._original_values.clear()
		self._row_state = DataRowState.UNCHANGED
		return self

	def _sync_columns(self):
		"""Align values with the table's current columns (defaults in, stale names out)."""
		columns = self._table.columns
		self._values = {
			col.column_name: self._values.get(col.column_name, col.default_value)
			for col in columns
		}
		self._original_values = {
			k: v for k, v in self._original_values.items() if columns.contains(k)
		}
		return self

	def _copy_state_from(self, other, deep=False):
		"""Copy values, original values and state from a row of a structurally identical table."""
		values = deepcopy(other._values) if deep else other._values
		original = deepcopy(other._original_values) if deep else other._original_values
		for name in self._values:
			if name in values:
				self._values[name] = values[name]
		self._original_values = {k: v for k, v in original.items() if k in self._values}
		self._row_state = other._row_state
		return self

	def __getitem__(self, key):
		return self.get(key)

	def __setitem__(self, key, value):
		self.set(self._resolve_name(key), value)

	def __contains__(self, name):
		return name in self._values

	def __iter__(self):
		return iter(self._values)

	def __len__(self):
		return len(self._values)

	def keys(self):
		return self._values.keys()

	def items(self):
		return self._values.items()

	def to_dict(self):
		return dict(self._values)

	def __str__(self):
		return json.dumps(self._values, default=str)

	def __repr__(self):
		values = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
		return f"DataRow({self._row_state.value}: {values})"
