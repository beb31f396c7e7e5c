"""Display and repr logic for DataTable and DataView."""

from __future__ import annotations
from datetime import date
from typing import List


# How many rows/columns to show before inserting "..."
MAX_HEAD_ROWS = 5
MAX_HEAD_COLS = 5

_NUMERIC = ('number',)


def _needs_quoting(name: str) -> bool:
	"""A name needs quoting if it contains anything outside [A-Za-z0-9_]
	OR has leading/trailing whitespace."""
	if not name:
		return False
	if name != name.strip():
		return True
	return not all(c.isalnum() or c == "_" for c in name)


def _format_value(v, data_type) -> str:
	if v is None:
		return "None"
	if data_type == 'number' and isinstance(v, float):
		return f"{v:.1f}" if v.is_integer() else f"{v:g}"
	if isinstance(v, date):
		return v.isoformat()
	if data_type == 'string':
		return repr(v)
	return str(v)


def _format_column(column, rows, max_preview: int = MAX_HEAD_ROWS) -> List[str]:
	"""Returns a list of strings representing that column, truncated for display."""
	name = column.column_name
	if len(rows) > max_preview * 2:
		head = [_format_value(r._values[name], column.data_type) for r in rows[:max_preview]]
		tail = [_format_value(r._values[name], column.data_type) for r in rows[-max_preview:]]
		return head + ['...'] + tail
	return [_format_value(r._values[name], column.data_type) for r in rows]


def _align(cells: List[str], width: int, data_type) -> List[str]:
	if data_type in _NUMERIC:
		return [s.rjust(width) for s in cells]
	return [s.ljust(width) for s in cells]


def _footer(kind, nrows, ncols, type_names, truncated=False, shown=MAX_HEAD_COLS) -> str:
	"""Generate footer line based on shape and column types."""
	if truncated:
		d = ", ".join(type_names[:shown]) + ", ..., " + ", ".join(type_names[-shown:])
	else:
		d = ", ".join(type_names)
	return f"# {nrows}×{ncols} {kind} <{d}>"


def _repr_grid(columns, rows, kind, title) -> str:
	"""Pretty repr for a grid of DataColumns and DataRows."""
	num_cols = len(columns)
	if num_cols == 0:
		return f"# {len(rows)}×0 {kind}"

	truncated = num_cols > MAX_HEAD_COLS * 2
	if truncated:
		shown_cols = columns[:MAX_HEAD_COLS] + [None] + columns[-MAX_HEAD_COLS:]
	else:
		shown_cols = list(columns)

	type_names = [col.data_type or "object" for col in columns]

	aligned = []
	for col in shown_cols:
		if col is None:
			body = _format_column(columns[0], rows)
			aligned.append(["..."] + ["..." for _ in body])
			continue
		header = repr(col.column_name) if _needs_quoting(col.column_name) else col.column_name
		body = _format_column(col, rows)
		width = max([len(header)] + [len(s) for s in body])
		aligned.append(_align([header] + body, width, col.data_type))

	lines = []
	if title:
		lines.append(title)
	for r in range(len(aligned[0])):
		lines.append("  ".join(col[r] for col in aligned).rstrip())

	lines.append("")
	lines.append(_footer(kind, len(rows), num_cols, type_names, truncated, MAX_HEAD_COLS))
	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by DataTable.__repr__ and DataView.__repr__."""
	from .view import DataView

	if isinstance(obj, DataView):
		table = obj.table
		return _repr_grid(list(table.columns), obj.get_rows(), "view", table.table_name)
	return _repr_grid(list(obj.columns), obj.rows._snapshot(), "table", obj.table_name)
