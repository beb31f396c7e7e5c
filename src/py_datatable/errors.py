class DataTableError(Exception):
	"""Base exception for py-datatable library."""
	pass


class DataTableKeyError(DataTableError, KeyError):
	"""Raised when a table, column or relation is missing."""
	pass


class DataTableTypeError(DataTableError, TypeError):
	"""Raised for invalid types in API calls."""
	pass


class DataTableValueError(DataTableError, ValueError):
	"""Raised for invalid values or arguments."""
	pass


class DataTableIndexError(DataTableError, IndexError):
	"""Raised for invalid positional access."""
	pass


class NotFoundError(DataTableKeyError):
	"""Raised when a name or position does not resolve to an existing member."""
	pass


class DuplicateNameError(DataTableValueError):
	"""Raised when adding a table, column or relation whose name is taken."""
	pass


class NullNotAllowedError(DataTableValueError):
	"""Raised when writing None to a column with allow_null=False."""
	pass


class TypeCoercionError(DataTableTypeError):
	"""Raised when a value cannot be converted to a column's declared type."""
	pass


class IndexOutOfRangeError(DataTableIndexError):
	"""Raised for row access outside [0, count - 1]."""
	pass
