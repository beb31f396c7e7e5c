from .column import DataColumn
from .errors import (
	DataTableTypeError,
	DataTableValueError,
	DuplicateNameError,
	NotFoundError,
)
from .relation import DataRelation
from .table import DataTable
from .typing import strict_equals


class DataSet:
	""" Named tables plus the relations between them """

	def __init__(self, data_set_name=''):
		self.data_set_name = data_set_name
		self._tables = {}
		self._relations = []

	@property
	def tables(self):
		"""Snapshot of the tables keyed by name."""
		return dict(self._tables)

	@property
	def relations(self):
		"""Snapshot of the relations, in insertion order."""
		return list(self._relations)

	#-----------------------------------------------------
	# Tables
	#-----------------------------------------------------

	def add_table(self, table_name_or_table):
		"""
		Add a DataTable, or create an empty one by name.

		Raises:
			DuplicateNameError: If a table with the same name exists
		"""
		if isinstance(table_name_or_table, DataTable):
			table = table_name_or_table
		elif isinstance(table_name_or_table, str):
			table = DataTable(table_name_or_table)
		else:
			raise DataTableTypeError(
				f"Expected DataTable or table name, got {type(table_name_or_table).__name__}"
			)

		if table.table_name in self._tables:
			raise DuplicateNameError(f"Table '{table.table_name}' already exists in the DataSet")

		self._tables[table.table_name] = table
		return table

	def remove_table(self, table_name):
		"""Remove a table and every relation that references it."""
		table = self.table(table_name)
		self._relations = [rel for rel in self._relations if not rel.references(table)]
		del self._tables[table_name]

	def table(self, table_name):
		if table_name not in self._tables:
			raise NotFoundError(f"Table '{table_name}' does not exist in the DataSet")
		return self._tables[table_name]

	def has_table(self, table_name):
		return table_name in self._tables

	def clear(self):
		"""Remove every row of every table; schemas and relations are kept."""
		for table in self._tables.values():
			table.clear()

	#-----------------------------------------------------
	# Relations
	#-----------------------------------------------------

	def _resolve_column(self, table_or_column, column_name, side):
		if isinstance(table_or_column, DataColumn):
			return table_or_column
		if isinstance(table_or_column, DataTable):
			table = table_or_column
		elif isinstance(table_or_column, str):
			table = self.table(table_or_column)
		else:
			raise DataTableTypeError(
				f"{side} must be a DataColumn, DataTable or table name, "
				f"got {type(table_or_column).__name__}"
			)
		if column_name is None:
			raise DataTableValueError(f"{side} column name is required with a table")
		if not table.columns.contains(column_name):
			raise NotFoundError(
				f"Column '{column_name}' does not exist in table '{table.table_name}'"
			)
		return table.columns.get(column_name)

	def add_relation(self, relation_name, parent_table_or_column, child_table_or_column,
			parent_column_name=None, child_column_name=None):
		"""
		Declare a relation between two columns.

		Args:
			relation_name: Unique name within this DataSet
			parent_table_or_column: Parent DataColumn, or parent table (name or instance)
			child_table_or_column: Child DataColumn, or child table (name or instance)
			parent_column_name: Parent column name when a table is given
			child_column_name: Child column name when a table is given

		Returns:
			The created DataRelation
		"""
		if any(rel.relation_name == relation_name for rel in self._relations):
			raise DuplicateNameError(f"Relation '{relation_name}' already exists in the DataSet")

		parent_column = self._resolve_column(parent_table_or_column, parent_column_name, "Parent")
		child_column = self._resolve_column(child_table_or_column, child_column_name, "Child")

		relation = DataRelation(relation_name, parent_column, child_column)
		self._relations.append(relation)
		return relation

	def remove_relation(self, relation_name):
		"""Remove a relation by name; unknown names are ignored."""
		for i, rel in enumerate(self._relations):
			if rel.relation_name == relation_name:
				del self._relations[i]
				return

	def relation(self, relation_name):
		for rel in self._relations:
			if rel.relation_name == relation_name:
				return rel
		raise NotFoundError(f"Relation '{relation_name}' does not exist")

	def get_relations(self, table_name):
		"""Relations whose parent or child table is named table_name."""
		return [
			rel for rel in self._relations
			if rel.parent_table.table_name == table_name or rel.child_table.table_name == table_name
		]

	def get_child_rows(self, parent_row, relation_name):
		"""Child rows whose related column equals the parent row's (linear scan)."""
		relation = self.relation(relation_name)
		parent_value = parent_row.get(relation.parent_column.column_name)
		child_name = relation.child_column.column_name
		return relation.child_table.find_rows(
			lambda row: strict_equals(row.get(child_name), parent_value)
		)

	def get_parent_row(self, child_row, relation_name):
		"""First parent row whose related column equals the child row's, or None."""
		relation = self.relation(relation_name)
		child_value = child_row.get(relation.child_column.column_name)
		parent_name = relation.parent_column.column_name
		return relation.parent_table.find_one(
			lambda row: strict_equals(row.get(parent_name), child_value)
		)

	#-----------------------------------------------------
	# Copying
	#-----------------------------------------------------

	def clone(self):
		"""Clone every table and rebuild the relations against the clones."""
		new_data_set = DataSet(self.data_set_name)

		for table in self._tables.values():
			new_data_set.add_table(table.clone())

		for relation in self._relations:
			parent_table = new_data_set.table(relation.parent_table.table_name)
			child_table = new_data_set.table(relation.child_table.table_name)
			new_data_set.add_relation(
				relation.relation_name,
				parent_table.columns.get(relation.parent_column.column_name),
				child_table.columns.get(relation.child_column.column_name),
			)

		return new_data_set

	def __len__(self):
		return len(self._tables)

	def __iter__(self):
		return iter(list(self._tables.values()))

	def __repr__(self):
		names = ", ".join(self._tables)
		return f"DataSet({self.data_set_name!r}: tables=[{names}], relations={len(self._relations)})"
