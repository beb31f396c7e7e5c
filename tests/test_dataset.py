"""DataSet tables, relations and relation-driven row lookups."""
import pytest
from py_datatable import DataSet, DataTable, DataRelation
from py_datatable.errors import (
	DataTableValueError,
	DuplicateNameError,
	NotFoundError,
)


@pytest.fixture
def shop():
	ds = DataSet('shop')
	parents = ds.add_table('P')
	parents.add_column('id', 'number')
	parents.add_column('name', 'string')
	children = ds.add_table('C')
	children.add_column('cid', 'number')
	children.add_column('pid', 'number')
	for pid, name in [(7, 'seven'), (8, 'eight')]:
		parents.add_row([pid, name])
	for cid, pid in [(1, 7), (2, 8), (3, 7), (4, None)]:
		children.add_row([cid, pid])
	ds.add_relation('P_C', 'P', 'C', 'id', 'pid')
	return ds


def ids(rows, column='cid'):
	return [row.get(column) for row in rows]


class TestTables:

	def test_add_by_name_and_instance(self):
		ds = DataSet()
		t = ds.add_table('a')
		assert ds.table('a') is t
		other = DataTable('b')
		assert ds.add_table(other) is other
		assert ds.has_table('b')
		assert list(ds.tables) == ['a', 'b']
		assert len(ds) == 2

	def test_duplicate(self, shop):
		with pytest.raises(DuplicateNameError):
			shop.add_table('P')
		with pytest.raises(DuplicateNameError):
			shop.add_table(DataTable('C'))

	def test_missing(self, shop):
		with pytest.raises(NotFoundError):
			shop.table('Nope')
		with pytest.raises(NotFoundError):
			shop.remove_table('Nope')

	def test_remove_cascades_relations(self, shop):
		shop.add_relation('other', 'P', 'P', 'id', 'id')
		shop.add_table('Z').add_column('x')
		shop.add_relation('Z_Z', 'Z', 'Z', 'x', 'x')
		shop.remove_table('C')
		assert [rel.relation_name for rel in shop.relations] == ['other', 'Z_Z']
		shop.remove_table('P')
		assert [rel.relation_name for rel in shop.relations] == ['Z_Z']

	def test_clear_keeps_schema_and_relations(self, shop):
		shop.clear()
		assert len(shop.table('P')) == 0
		assert len(shop.table('C')) == 0
		assert shop.table('C').columns.names() == ['cid', 'pid']
		assert len(shop.relations) == 1


class TestRelations:

	def test_relation_from_columns(self, shop):
		p = shop.table('P').columns.get('id')
		c = shop.table('C').columns.get('cid')
		relation = shop.add_relation('by_cid', p, c)
		assert relation.parent_table is shop.table('P')
		assert relation.child_table is shop.table('C')
		assert str(relation) == 'by_cid: P.id -> C.cid'

	def test_missing_column(self, shop):
		with pytest.raises(NotFoundError, match="does not exist in table 'P'"):
			shop.add_relation('bad', 'P', 'C', 'nope', 'pid')

	def test_missing_table(self, shop):
		with pytest.raises(NotFoundError):
			shop.add_relation('bad', 'X', 'C', 'id', 'pid')

	def test_table_without_column_name(self, shop):
		with pytest.raises(DataTableValueError):
			shop.add_relation('bad', 'P', 'C')

	def test_duplicate_name(self, shop):
		with pytest.raises(DuplicateNameError):
			shop.add_relation('P_C', 'P', 'C', 'id', 'pid')

	def test_remove_unknown_is_noop(self, shop):
		shop.remove_relation('nope')
		assert len(shop.relations) == 1
		shop.remove_relation('P_C')
		assert shop.relations == []

	def test_get_relations(self, shop):
		assert [r.relation_name for r in shop.get_relations('C')] == ['P_C']
		assert shop.get_relations('Nope') == []

	def test_is_valid_is_strict(self, shop):
		relation = shop.relation('P_C')
		parent = shop.table('P').rows.at(0)
		child = shop.table('C').rows.at(0)
		assert relation.is_valid(parent, child)
		assert not relation.is_valid(parent, shop.table('C').rows.at(1))

	def test_detached_column(self):
		t = DataTable('t')
		col = t.add_column('a')
		t.remove_column('a')
		with pytest.raises(DataTableValueError):
			DataRelation('r', col, col)


class TestNavigation:

	def test_child_rows(self, shop):
		parent = shop.table('P').find_one({'id': 7})
		children = shop.get_child_rows(parent, 'P_C')
		assert ids(children) == [1, 3]

	def test_parent_row_round_trip(self, shop):
		parent = shop.table('P').find_one({'id': 7})
		for child in shop.get_child_rows(parent, 'P_C'):
			assert shop.get_parent_row(child, 'P_C') is parent

	def test_orphan_has_no_parent(self, shop):
		orphan = shop.table('C').find_one({'cid': 4})
		assert shop.get_parent_row(orphan, 'P_C') is None

	def test_reads_live_state(self, shop):
		parent = shop.table('P').find_one({'id': 8})
		shop.table('C').add_row([5, 8])
		assert ids(shop.get_child_rows(parent, 'P_C')) == [2, 5]
		parent.set('id', 7)
		assert ids(shop.get_child_rows(parent, 'P_C')) == [1, 3]

	def test_unknown_relation(self, shop):
		parent = shop.table('P').rows.at(0)
		with pytest.raises(NotFoundError, match="Relation 'nope' does not exist"):
			shop.get_child_rows(parent, 'nope')
		with pytest.raises(NotFoundError):
			shop.get_parent_row(parent, 'nope')


class TestClone:

	def test_clone_rebuilds_relations_on_cloned_columns(self, shop):
		copy = shop.clone()
		relation = copy.relation('P_C')
		assert relation.parent_table is copy.table('P')
		assert relation.child_table is copy.table('C')
		assert relation.parent_column is copy.table('P').columns.get('id')
		assert relation.parent_column is not shop.table('P').columns.get('id')

	def test_clone_is_independent(self, shop):
		copy = shop.clone()
		copy.table('C').add_row([9, 7])
		parent = copy.table('P').find_one({'id': 7})
		assert ids(copy.get_child_rows(parent, 'P_C')) == [1, 3, 9]
		original_parent = shop.table('P').find_one({'id': 7})
		assert ids(shop.get_child_rows(original_parent, 'P_C')) == [1, 3]
