"""
Contract Mutation Engine

Apply an add / update / delete from the editor back onto the contract string.

The row tree is only used to find *where* the edited row lives (its chain of
ancestor names). The change itself is applied to a freshly parsed copy of the
document at that path, so anything the rows do not model (examples on
untouched siblings, definition keywords such as minLength) survives.
"""
from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .case_insensitive import CaseInsensitiveDict
from .error_taxonomy import SchemaEditorErrorTaxonomy
from .models import (
    ArraySchema,
    ModelOption,
    ObjectSchema,
    OptionLike,
    OptionValue,
    PrimitiveSchema,
    ReferenceSchema,
    Row,
    RowLike,
    SchemaNode,
    as_option,
    as_row,
    as_rows,
    format_reference_name,
    type_label,
)
from .parser import (
    load_contract,
    parse_contract_array,
    resolve_reference,
    row_from_schema,
    schema_from_json,
    schema_type,
)
from .settings import settings
from .tree import row_path

logger = logging.getLogger(__name__)

__all__ = [
    'build_new_object',
    'create_schema_string',
    'format_reference_name',
    'get_existing_options',
    'schema_from_row',
    'update_contract_string',
]


def _log_event(event: str, error_code: Optional[str] = None, **fields: Any) -> None:
    entry: Dict[str, Any] = {"event": event}
    if error_code:
        entry["error_code"] = error_code
        entry["severity"] = SchemaEditorErrorTaxonomy.severity_level(error_code)
    entry.update(fields)
    if error_code:
        logger.warning(json.dumps(entry, default=str))
    else:
        logger.debug(json.dumps(entry, default=str))


def _dump(document: Dict[str, Any]) -> str:
    indent = settings.output_indent
    separators = None if indent is not None else (",", ":")
    return json.dumps(document, ensure_ascii=False, indent=indent, separators=separators)


def _reference_pointer(row: Row, definitions: CaseInsensitiveDict) -> Optional[str]:
    """The "$ref" to write for ``row``, or None once the user has retyped it.

    A reference whose definition is missing parses to a typeless row, so a
    typeless row keeps its pointer either way.
    """
    if not row.reference:
        return None
    if row.reference not in definitions:
        return f"#/{row.reference}" if row.type is None else None
    pointer = f"#/{definitions.original_key(row.reference)}"
    target = resolve_reference(row.reference, definitions)
    if row.type is None or target is None:
        return pointer
    if (type_label(row.type) or "").lower() == (type_label(schema_type(target)) or "").lower():
        return pointer
    return None


def schema_from_row(row: RowLike, definitions: Optional[CaseInsensitiveDict] = None) -> SchemaNode:
    """Translate a Row (and its children) into the schema variant to store.

    UI-only fields (rowId, name, isLocked, parentId) never reach storage;
    ``reference`` stays a "$ref" until the row is given a type that differs
    from its definition's.
    """
    row = as_row(row)
    definitions = definitions if definitions is not None else CaseInsensitiveDict()

    if row.ref:
        return ReferenceSchema(ref=row.ref)

    pointer = _reference_pointer(row, definitions)
    if pointer is not None:
        return ReferenceSchema(ref=pointer)

    if row.type == "array" or row.items is not None:
        items = row.items
        if items is not None and row.properties is not None:
            items = items.model_copy(update={"properties": row.properties})
        elif items is None and row.properties is not None:
            items = Row(type="object", properties=row.properties)
        return ArraySchema(items=schema_from_row(items, definitions) if items is not None else None)

    if row.properties is not None or row.type == "object":
        children = None
        if row.properties is not None:
            children = {child.name: schema_from_row(child, definitions) for child in row.properties}
        return ObjectSchema(properties=children)

    fields = {
        key: getattr(row, key)
        for key in ("type", "format", "pattern", "example")
        if getattr(row, key) is not None
    }
    return PrimitiveSchema(**fields)


def _properties_of(node: Any, create: bool = False) -> Optional[Dict[str, Any]]:
    """The child mapping of an object schema, or of the innermost item schema of an array."""
    if not isinstance(node, dict):
        return None
    while node.get("type") == "array" or ("items" in node and "properties" not in node):
        node = node.get("items")
        if not isinstance(node, dict):
            return None
    props = node.get("properties")
    if not isinstance(props, dict):
        if not create:
            return None
        props = {}
        node["properties"] = props
    return props


def _resolve_container(root: Dict[str, Any], names: List[str]) -> Optional[Dict[str, Any]]:
    container = root
    for name in names:
        if container is None or name not in container:
            return None
        container = _properties_of(container[name])
    return container


_ROW_KEYWORDS = ("$ref", "type", "format", "pattern", "example", "properties", "items")


def _carry_unmodeled(stored: Any, fresh: Dict[str, Any]) -> Dict[str, Any]:
    """Copy keywords rows do not model (minLength, description, ...) from the stored node.

    Only applies while the node keeps its kind; pointers stay bare. Children
    are matched by name, so renamed ones are written from the row alone.
    """
    if not isinstance(stored, dict) or "$ref" in fresh:
        return fresh
    if schema_from_json(stored).kind != schema_from_json(fresh).kind:
        return fresh
    merged = dict(fresh)
    for key, value in stored.items():
        if key not in _ROW_KEYWORDS and key not in merged:
            merged[key] = value
    stored_props, fresh_props = stored.get("properties"), fresh.get("properties")
    if isinstance(stored_props, dict) and isinstance(fresh_props, dict):
        merged["properties"] = {
            key: _carry_unmodeled(stored_props.get(key), value) for key, value in fresh_props.items()
        }
    if isinstance(fresh.get("items"), dict):
        merged["items"] = _carry_unmodeled(stored.get("items"), fresh["items"])
    return merged


def _replace_key(container: Dict[str, Any], old_key: str, new_key: str, value: Any) -> None:
    entries = list(container.items())
    container.clear()
    for key, current in entries:
        if key == old_key:
            container[new_key] = value
        else:
            container[key] = current


def update_contract_string(
    edited_row: RowLike,
    rows: Iterable[RowLike],
    contract_string: str,
    is_delete: bool = False,
) -> str:
    """
    Apply one edit to the contract and return the new contract string.

    Args:
        edited_row: Row as submitted by the editor (rowId identifies the target)
        rows: Current row tree, consistent with contract_string
        contract_string: Stored contract JSON
        is_delete: Remove the target row instead of writing it

    Returns:
        Updated contract string. Unusable input or an edit that cannot be
        placed returns contract_string unchanged.
    """
    parsed = load_contract(contract_string)
    if parsed is None:
        return contract_string

    edited = as_row(edited_row)
    tree = as_rows(rows)
    document = parsed.document
    root = _properties_of(document[parsed.contract_key], create=True)
    if root is None:
        _log_event("contract_update_skipped", "path_not_found", row_id=edited.row_id)
        return contract_string

    path = row_path(tree, edited) if edited.row_id is not None else None

    if path is None:
        if is_delete:
            _log_event("contract_delete_skipped", "row_not_found", row_id=edited.row_id)
            return contract_string
        if not edited.name:
            _log_event("contract_update_skipped", "missing_name", row_id=edited.row_id)
            return contract_string
        root[edited.name] = schema_from_row(edited, parsed.definitions).to_json()
        _log_event("contract_row_added", name=edited.name)
        return _dump(document)

    container = _resolve_container(root, [row.name for row in path[:-1]])
    stored_key = path[-1].name
    if container is None or stored_key not in container:
        _log_event("contract_update_skipped", "path_not_found", row_id=edited.row_id, key=stored_key)
        return contract_string

    if is_delete:
        del container[stored_key]
        _log_event("contract_row_deleted", row_id=edited.row_id, key=stored_key)
        return _dump(document)

    if not edited.name:
        _log_event("contract_update_skipped", "missing_name", row_id=edited.row_id)
        return contract_string
    if edited.name != stored_key and edited.name in container:
        _log_event("contract_update_skipped", "name_collision", row_id=edited.row_id, key=edited.name)
        return contract_string

    fresh = schema_from_row(edited, parsed.definitions).to_json()
    if edited.name == stored_key:
        fresh = _carry_unmodeled(container[stored_key], fresh)
    _replace_key(container, stored_key, edited.name, fresh)
    _log_event("contract_row_updated", row_id=edited.row_id, key=edited.name, renamed=edited.name != stored_key)
    return _dump(document)


def _schema_string(properties: Optional[List[Row]], definitions: CaseInsensitiveDict) -> str:
    node = ObjectSchema(properties={
        child.name: schema_from_row(child, definitions) for child in (properties or [])
    })
    return json.dumps(node.to_json(), ensure_ascii=False, separators=(",", ":"))


def create_schema_string(model: RowLike, contract_string: Optional[str] = None) -> str:
    """Compact standalone object schema built from ``model.properties``.

    Passing the contract string lets referencing children keep their "$ref".
    """
    definitions = CaseInsensitiveDict()
    if contract_string is not None:
        parsed = load_contract(contract_string)
        if parsed is not None:
            definitions = parsed.definitions
    return _schema_string(as_row(model).properties, definitions)


def build_new_object(
    name: str,
    type_option: OptionLike,
    example: Any,
    existing_row: Optional[RowLike],
    contract_string: Optional[str],
) -> Row:
    """
    Build the row for a field defined (or redefined) in the editor.

    The option's schemaString is parsed with the same rules as the contract;
    an option naming one of the contract's definitions becomes a reference.
    The existing row's rowId/parentId carry over so the edit keeps its identity.
    """
    option = as_option(type_option)
    existing = as_row(existing_row) if existing_row is not None else Row()
    parsed = load_contract(contract_string) if contract_string else None
    definitions = parsed.definitions if parsed is not None else CaseInsensitiveDict()

    value = option.value
    if value is None or not value.schema_string:
        row = Row(name=name, type="object", properties=existing.properties or [])
    elif value.schema_name and value.schema_name in definitions:
        reference = definitions.original_key(value.schema_name)
        row = row_from_schema(name, ReferenceSchema(ref=f"#/{reference}"), definitions)
    else:
        try:
            raw = json.loads(value.schema_string)
        except ValueError:
            _log_event("option_schema_unreadable", 'malformed_json', option=option.display_name)
            raw = {}
        try:
            node = schema_from_json(raw)
        except ValidationError:
            _log_event("option_schema_unreadable", 'invalid_schema', option=option.display_name)
            node = PrimitiveSchema()
        row = row_from_schema(name, node, definitions)

    updates: Dict[str, Any] = {"row_id": existing.row_id, "parent_id": existing.parent_id}
    if example is not None and example != "" and row.type not in ("object", "array"):
        updates["example"] = example
    return row.model_copy(update=updates)


def get_existing_options(contract_string: str) -> List[ModelOption]:
    """One option per distinct nested object model found in the Contract."""
    rows = parse_contract_array(contract_string)
    if rows is None:
        return []
    definitions = load_contract(contract_string).definitions

    options: List[ModelOption] = []
    seen = set()

    def _collect(level: List[Row], prefix: str) -> None:
        for row in level:
            path = f"{prefix}/{row.name}"
            # arrays qualify through the children lifted from their innermost object item
            is_model = row.type == "object" or (row.type == "array" and row.properties is not None)
            if is_model and row.reference is None and row.name not in seen:
                seen.add(row.name)
                options.append(ModelOption(
                    display_name=row.name,
                    id=str(uuid.uuid5(uuid.NAMESPACE_URL, f"contract:{path}")),
                    value=OptionValue(
                        schema_name=row.name,
                        schema_string=_schema_string(row.properties, definitions),
                    ),
                ))
            if row.properties:
                _collect(row.properties, path)

    _collect(rows, "")
    return options
