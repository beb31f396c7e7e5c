import weakref

from .errors import DataTableValueError, NotFoundError
from .typing import strict_equals


class DataRelation:
	""" Named link from a parent table's column to a child table's column """

	def __init__(self, relation_name, parent_column, child_column):
		parent_table = parent_column.table
		child_table = child_column.table
		if parent_table is None or child_table is None:
			raise DataTableValueError(
				f"Relation '{relation_name}' needs columns that belong to a table"
			)
		self.relation_name = relation_name
		self.parent_column = parent_column
		self.child_column = child_column
		self._parent_table_ref = weakref.ref(parent_table)
		self._child_table_ref = weakref.ref(child_table)

	@staticmethod
	def _resolve(ref, role, relation_name):
		table = ref()
		if table is None:
			raise NotFoundError(f"{role} table of relation '{relation_name}' no longer exists")
		return table

	@property
	def parent_table(self):
		return self._resolve(self._parent_table_ref, "Parent", self.relation_name)

	@property
	def child_table(self):
		return self._resolve(self._child_table_ref, "Child", self.relation_name)

	def references(self, table):
		"""True if table is this relation's parent or child table."""
		return self._parent_table_ref() is table or self._child_table_ref() is table

	def is_valid(self, parent_row, child_row):
		"""True if the two rows agree on the related columns (no type coercion)."""
		parent_value = parent_row.get(self.parent_column.column_name)
		child_value = child_row.get(self.child_column.column_name)
		return strict_equals(parent_value, child_value)

	def __str__(self):
		parent = self._parent_table_ref()
		child = self._child_table_ref()
		parent_name = parent.table_name if parent is not None else '?'
		child_name = child.table_name if child is not None else '?'
		return (
			f"{self.relation_name}: {parent_name}.{self.parent_column.column_name}"
			f" -> {child_name}.{self.child_column.column_name}"
		)

	def __repr__(self):
		return f"DataRelation({self})"
