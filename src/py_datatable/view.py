from .criteria import compile_criteria
from .errors import IndexOutOfRangeError
from .typing import sort_direction


class DataView:
	"""
	Read-only filtered/sorted projection of one DataTable.

	Nothing is cached: every read recomputes from the table's live rows.
	Unsorted views return the table's own DataRow objects; sorted views
	return copies owned by a temporary table.
	"""

	def __init__(self, table, row_filter=None, sort=None, sort_order='asc'):
		self._table = table
		self.set_filter(row_filter)
		self.set_sort(sort, sort_order)

	@property
	def table(self):
		return self._table

	@property
	def row_filter(self):
		return self._row_filter

	@property
	def sort(self):
		return self._sort

	@property
	def sort_order(self):
		return self._sort_order

	def set_filter(self, row_filter):
		"""
		Set the filter: a callable taking a DataRow, a criteria mapping
		(same forms as DataTable.find_rows), or None. Returns self.
		"""
		self._row_filter = row_filter
		self._matches = compile_criteria(row_filter) if row_filter is not None else None
		return self

	def set_sort(self, sort, order='asc'):
		"""
		Set the sort: a column name (with order), a key callable taking a
		DataRow, a list of sort_multiple criteria, or None. Returns self.
		"""
		sort_direction(order)
		self._sort = sort
		self._sort_order = order
		return self

	def _rows_table(self, rows, deep=False):
		return self._table._copy_structure()._adopt_rows(rows, deep=deep)

	def get_rows(self):
		"""Current filtered and sorted rows."""
		rows = self._table.rows._snapshot()

		if self._matches is not None:
			rows = [row for row in rows if self._matches(row)]

		if self._sort is not None:
			sorted_table = self._rows_table(rows)
			if callable(self._sort):
				sorted_table.sort_by(self._sort)
			elif isinstance(self._sort, (list, tuple)):
				sorted_table.sort_multiple(*self._sort)
			else:
				sorted_table.sort(self._sort, self._sort_order)
			rows = sorted_table.rows._snapshot()

		return rows

	def to_table(self):
		"""Independent DataTable with the source's columns and the view's rows."""
		return self._rows_table(self.get_rows(), deep=True)

	def to_list(self):
		"""Plain dict snapshots of the view's rows."""
		return [row.to_dict() for row in self.get_rows()]

	def row(self, index):
		rows = self.get_rows()
		if not 0 <= index < len(rows):
			raise IndexOutOfRangeError(f"Index {index} out of range [0, {len(rows) - 1}]")
		return rows[index]

	@property
	def first_row(self):
		rows = self.get_rows()
		return rows[0] if rows else None

	@property
	def count(self):
		return len(self.get_rows())

	def __len__(self):
		return len(self.get_rows())

	def __iter__(self):
		return iter(self.get_rows())

	def __repr__(self):
		from .display import _printr
		return _printr(self)
