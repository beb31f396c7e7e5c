import pytest
from py_datatable import DataTable


@pytest.fixture
def users():
	"""Users(id:number pk, name:string, age:number) with two rows."""
	t = DataTable('Users')
	t.add_column('id', 'number')
	t.add_column('name', 'string')
	t.add_column('age', 'number')
	t.primary_key = ['id']
	t.add_row({'id': 1, 'name': 'A', 'age': 30})
	t.add_row({'id': 2, 'name': 'B', 'age': 25})
	return t
