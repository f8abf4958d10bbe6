"""
Row tree navigation helpers.

Everything here is read-only with respect to its inputs: lookups return
rows from the given tree, and the update/delete helpers work on a deep copy
and hand back a new tree.
"""
from __future__ import annotations

import copy
from typing import Any, Iterable, List, Optional, Sequence, Union

from .models import (
    ModelOption,
    OptionLike,
    Row,
    RowLike,
    as_option,
    as_row,
    as_rows,
    format_reference_name,
    type_label,
)
from .settings import settings


def _row_id_of(row: Union[RowLike, int, str, None]) -> Optional[Union[int, str]]:
    if row is None or isinstance(row, (int, str)):
        return row
    return as_row(row).row_id


def find_row(row_id: Optional[Union[int, str]], rows: Iterable[RowLike]) -> Optional[Row]:
    """Depth-first search for the row carrying ``row_id``."""
    if row_id is None:
        return None
    for row in as_rows(rows):
        if row.row_id == row_id:
            return row
        if row.properties:
            found = find_row(row_id, row.properties)
            if found is not None:
                return found
    return None


def row_path(tree: Iterable[RowLike], row: Union[RowLike, int, str]) -> Optional[List[Row]]:
    """Chain of rows from the root level down to ``row`` (inclusive)."""
    row_id = _row_id_of(row)
    if row_id is None:
        return None
    for candidate in as_rows(tree):
        if candidate.row_id == row_id:
            return [candidate]
        if candidate.properties:
            below = row_path(candidate.properties, row_id)
            if below is not None:
                return [candidate] + below
    return None


def find_parent(tree: Iterable[RowLike], child_row: Union[RowLike, int, str]) -> Optional[Row]:
    """Immediate parent of ``child_row``; None for a root-level or unknown row."""
    path = row_path(tree, child_row)
    if not path or len(path) < 2:
        return None
    return path[-2]


def deep_copy(value: Any) -> Any:
    return copy.deepcopy(value)


def last(sequence: Sequence[Any]) -> Any:
    return sequence[-1] if sequence else None


def reorder_options(options: Iterable[OptionLike]) -> List[ModelOption]:
    """Sort options by display name and end with a single "new model" entry."""
    kept = [option for option in (as_option(o) for o in options or []) if not option.is_sentinel]
    ordered = sorted(kept, key=lambda option: option.display_name)
    ordered.append(ModelOption(display_name=settings.new_model_label, id=0, value=None))
    return ordered


def item_display_type(items: Row) -> str:
    if items.reference:
        return items.reference.lower()
    if items.ref:
        return format_reference_name(items.ref).lower()
    return items.format or type_label(items.type) or "object"


def get_display_type(row: RowLike) -> str:
    """Type label shown in the grid.

    Priority: reference (lower-cased), "type (format)", type, then "object".
    """
    row = as_row(row)
    if row.reference:
        return row.reference.lower()
    if row.ref:
        return format_reference_name(row.ref).lower()
    label = type_label(row.type)
    if row.format:
        return f"{label} ({row.format})" if label else row.format
    if row.type == "array" and row.items is not None:
        return f"array ({item_display_type(row.items)})"
    return label or "object"


def _replace_in(rows: List[Row], new_row: Row) -> bool:
    for index, row in enumerate(rows):
        if row.row_id == new_row.row_id:
            rows[index] = new_row
            return True
        if row.properties and _replace_in(row.properties, new_row):
            return True
    return False


def _delete_in(rows: List[Row], row_id: Union[int, str]) -> bool:
    for index, row in enumerate(rows):
        if row.row_id == row_id:
            del rows[index]
            return True
        if row.properties and _delete_in(row.properties, row_id):
            return True
    return False


def find_row_in_tree_and_update(tree: Iterable[RowLike], new_row: RowLike) -> Optional[List[Row]]:
    """Return a copy of ``tree`` with the row matching ``new_row.rowId`` swapped in.

    None when the row id does not occur anywhere in the tree.
    """
    new_row = as_row(new_row)
    if new_row.row_id is None:
        return None
    updated = [row.model_copy(deep=True) for row in as_rows(tree)]
    if not _replace_in(updated, new_row.model_copy(deep=True)):
        return None
    return updated


def find_row_in_tree_and_delete(tree: Iterable[RowLike], row: RowLike) -> Optional[List[Row]]:
    """Return a copy of ``tree`` without the row matching ``row.rowId`` (None if absent)."""
    row_id = _row_id_of(row)
    if row_id is None:
        return None
    updated = [candidate.model_copy(deep=True) for candidate in as_rows(tree)]
    if not _delete_in(updated, row_id):
        return None
    return updated
