"""Schema export/import, comparison and reconciliation."""
from datetime import datetime

import pytest
from py_datatable import DataTable, DataColumn, SchemaDifferences
from py_datatable.errors import DataTableValueError


@pytest.fixture
def orders():
	t = DataTable('Orders')
	t.case_sensitive = True
	t.add_column('id', 'number')
	code = t.add_column('code', 'string')
	code.unique = True
	code.caption = 'Order code'
	t.add_column(DataColumn('placed', 'date', default_value=datetime(2024, 1, 1)))
	total = t.add_column('total', 'number')
	total.read_only = True
	total.expression = 'qty * price'
	t.primary_key = ['id']
	return t


class TestExport:

	def test_structure(self, orders):
		schema = orders.export_schema()
		assert schema['table_name'] == 'Orders'
		assert schema['case_sensitive'] is True
		assert schema['primary_key'] == ['id']
		assert [c['name'] for c in schema['columns']] == ['id', 'code', 'placed', 'total']
		assert [c['ordinal'] for c in schema['columns']] == [0, 1, 2, 3]
		assert schema['columns'][3] == {
			'name': 'total',
			'data_type': 'number',
			'allow_null': True,
			'default_value': None,
			'expression': 'qty * price',
			'read_only': True,
			'unique': False,
			'ordinal': 3,
			'caption': 'total',
		}

	def test_unique_constraints_skip_primary_key(self, orders):
		assert orders.export_schema()['unique_constraints'] == [
			{'columns': ['code'], 'name': 'UQ_Orders_code'}
		]

	def test_no_primary_key(self):
		t = DataTable('t')
		t.add_column('a')
		assert t.export_schema()['primary_key'] is None


class TestImport:

	def test_round_trip(self, orders):
		copy = DataTable.import_schema(orders.export_schema())
		assert copy.export_schema() == orders.export_schema()
		assert len(copy) == 0

	def test_primary_key_forces_constraints(self):
		table = DataTable.import_schema({
			'table_name': 't',
			'columns': [{'name': 'id', 'data_type': 'number', 'allow_null': True}],
			'primary_key': ['id'],
		})
		col = table.columns.get('id')
		assert col.is_primary_key
		assert col.allow_null is False
		assert col.unique is True

	def test_defaults_when_keys_missing(self):
		table = DataTable.import_schema({'columns': [{'name': 'a'}]})
		col = table.columns.get('a')
		assert table.table_name == ''
		assert col.allow_null is True
		assert col.data_type is None
		assert col.caption == 'a'

	def test_json_round_trip_restores_dates(self, orders):
		text = orders.serialize_schema()
		assert '"2024-01-01T00:00:00"' in text
		copy = DataTable.deserialize_schema(text)
		assert copy.columns.get('placed').default_value == datetime(2024, 1, 1)
		assert copy.export_schema() == orders.export_schema()

	def test_bad_input(self):
		with pytest.raises(DataTableValueError):
			DataTable.import_schema({'table_name': 'x'})
		with pytest.raises(DataTableValueError, match="Invalid schema JSON"):
			DataTable.deserialize_schema('{not json')


def make(name, *columns):
	t = DataTable(name)
	for col in columns:
		t.add_column(col)
	return t


class TestCompare:

	def test_identical(self, orders):
		differences = orders.compare_schema(orders.clone())
		assert isinstance(differences, SchemaDifferences)
		assert not differences

	def test_differences(self):
		mine = make('a', DataColumn('id', 'number'), DataColumn('name', 'string'), DataColumn('old'))
		theirs = make('b', DataColumn('id', 'string'), DataColumn('name', 'string', allow_null=False), DataColumn('new'))
		differences = mine.compare_schema(theirs)
		assert differences.missing_columns == ['new']
		assert differences.extra_columns == ['old']
		assert [(m.column, m.this_type, m.other_type) for m in differences.type_mismatches] == [('id', 'number', 'string')]
		assert [(d.column, d.this_allow_null, d.other_allow_null) for d in differences.nullability_differences] == [('name', True, False)]
		assert differences.to_dict()['missing_columns'] == ['new']


class TestUpdate:

	@pytest.fixture
	def pair(self):
		target = make('target', DataColumn('id', 'string'), DataColumn('name', 'string'), DataColumn('legacy'))
		target.add_row(['1', 'A', 'x'])
		source = make('source', DataColumn('id', 'number'), DataColumn('name', 'string', allow_null=False),
			DataColumn('email', 'string', default_value='n/a'))
		source.columns.get('email').caption = 'E-mail'
		return target, source

	def test_default_adds_but_keeps_extra(self, pair):
		target, source = pair
		result = target.update_schema(source)
		assert result.added_columns == ['email']
		assert result.removed_columns == []
		assert target.columns.names() == ['id', 'name', 'legacy', 'email']
		assert target.columns.get('email').caption == 'E-mail'
		assert target.columns.get('email').table is target
		assert source.columns.get('email').table is source
		assert target.rows.at(0).get('email') == 'n/a'

	def test_remove_extra(self, pair):
		target, source = pair
		row = target.rows.at(0)
		result = target.update_schema(source, add_missing=False, remove_extra=True)
		assert result.added_columns == []
		assert result.removed_columns == ['legacy']
		assert 'legacy' not in row

	def test_modifications_are_reported_not_applied_to_values(self, pair):
		target, source = pair
		result = target.update_schema(source)
		changes = [(m.column, m.change, m.old, m.new) for m in result.modified_columns]
		assert changes == [('id', 'data_type', 'string', 'number'), ('name', 'allow_null', True, False)]
		assert target.columns.get('id').data_type == 'number'
		assert target.columns.get('name').allow_null is False
		# metadata only: the stored value is not re-coerced
		assert target.rows.at(0).get('id') == '1'
		assert not target.compare_schema(source).type_mismatches
