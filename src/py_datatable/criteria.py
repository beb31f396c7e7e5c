"""
Row criteria for find_rows() and DataView filters.

Criteria are resolved once, at the call boundary, into one of:
	- Predicate(fn): fn(row) is truthy
	- Equals(value): column value equals value (no bool/number mixing)
	- Pattern(regex): regex.search(str(column value))
	- Operator(op, operand): $gt, $gte, $lt, $lte, $ne, $in, $contains

A criteria mapping ANDs its entries; an operator mapping ANDs its operators.
"""

import operator
import re
from collections.abc import Mapping

from .errors import DataTableTypeError, DataTableValueError
from .typing import strict_equals

_MISSING = object()


def _ordered(op):
	def test(value, operand):
		if value is None or operand is None:
			return False
		try:
			return bool(op(value, operand))
		except TypeError:
			return False
	return test


def _contains(value, operand):
	if value is None:
		return False
	return str(operand) in str(value)


def _in(value, operand):
	return any(strict_equals(value, x) for x in operand)


OPERATORS = {
	'$gt': _ordered(operator.gt),
	'$gte': _ordered(operator.ge),
	'$lt': _ordered(operator.lt),
	'$lte': _ordered(operator.le),
	'$ne': lambda value, operand: not strict_equals(value, operand),
	'$in': _in,
	'$contains': _contains,
}


class Criterion:
	"""Test applied to a single column value."""
	__slots__ = ()

	def matches(self, value):
		raise NotImplementedError


class Equals(Criterion):
	__slots__ = ('value',)

	def __init__(self, value):
		self.value = value

	def matches(self, value):
		return strict_equals(value, self.value)

	def __repr__(self):
		return f"Equals({self.value!r})"


class Pattern(Criterion):
	__slots__ = ('pattern',)

	def __init__(self, pattern):
		self.pattern = pattern

	def matches(self, value):
		return self.pattern.search(str(value)) is not None

	def __repr__(self):
		return f"Pattern({self.pattern.pattern!r})"


class Operator(Criterion):
	__slots__ = ('op', 'operand', '_test')

	def __init__(self, op, operand):
		if op not in OPERATORS:
			raise DataTableValueError(
				f"Unknown criteria operator {op!r}; expected one of {', '.join(OPERATORS)}"
			)
		if op == '$in' and (isinstance(operand, (str, bytes)) or not hasattr(operand, '__iter__')):
			raise DataTableTypeError("$in operand must be a non-string iterable")
		self.op = op
		self.operand = tuple(operand) if op == '$in' else operand
		self._test = OPERATORS[op]

	def matches(self, value):
		return self._test(value, self.operand)

	def __repr__(self):
		return f"Operator({self.op!r}, {self.operand!r})"


class Predicate:
	"""Whole-row test; the callable receives the DataRow."""
	__slots__ = ('fn',)

	def __init__(self, fn):
		self.fn = fn

	def __call__(self, row):
		return bool(self.fn(row))

	def __repr__(self):
		return f"Predicate({self.fn!r})"


def _is_operator_mapping(value):
	return isinstance(value, Mapping) and value and all(
		isinstance(k, str) and k.startswith('$') for k in value
	)


def column_criteria(value):
	"""Resolve one criteria entry to the list of Criterion it requires."""
	if isinstance(value, re.Pattern):
		return [Pattern(value)]
	if _is_operator_mapping(value):
		return [Operator(op, operand) for op, operand in value.items()]
	return [Equals(value)]


class ColumnCriteria:
	"""Conjunction of per-column criteria; called with a DataRow."""
	__slots__ = ('entries',)

	def __init__(self, entries):
		self.entries = entries

	def __call__(self, row):
		values = row._values
		for column_name, criteria in self.entries:
			value = values.get(column_name, _MISSING)
			if value is _MISSING:
				return False
			for criterion in criteria:
				if not criterion.matches(value):
					return False
		return True

	def __repr__(self):
		return f"ColumnCriteria({self.entries!r})"


def compile_criteria(criteria):
	"""
	Turn user criteria into a row matcher.

	Args:
		criteria: callable taking a DataRow, or a mapping of column name to
		          a plain value, a compiled regex, or an operator mapping

	Returns:
		Callable taking a DataRow and returning bool
	"""
	if isinstance(criteria, (Predicate, ColumnCriteria)):
		return criteria
	if callable(criteria):
		return Predicate(criteria)
	if isinstance(criteria, Mapping):
		return ColumnCriteria([(name, column_criteria(value)) for name, value in criteria.items()])
	raise DataTableTypeError(
		f"Criteria must be a callable or a mapping, got {type(criteria).__name__}"
	)
