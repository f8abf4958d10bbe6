"""
Contract display formatting.

Render the Contract model as a flat run of HTML spans, one per property. The
nesting depth is exposed as a --depth CSS variable so the stylesheet can
indent rows. Each call collects its spans in its own list.
"""
from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from .case_insensitive import CaseInsensitiveDict
from .models import ArraySchema, ObjectSchema, PrimitiveSchema, ReferenceSchema, SchemaNode, type_label
from .parser import CONTRACT_KEY, item_type_of, parse_schema, resolve_reference, schema_from_json, schema_type
from .settings import settings


def _span(depth: int, body: str) -> str:
    return (
        f"<span class='{settings.display_row_class}' style='--depth:{depth};'>"
        f"{body}<br></span>"
    )


def _as_schema_map(schema: Union[str, Mapping[str, Any], None]) -> Optional[CaseInsensitiveDict]:
    if schema is None:
        return None
    if isinstance(schema, str):
        return parse_schema(schema)
    try:
        return CaseInsensitiveDict({
            key: value if isinstance(value, (ReferenceSchema, PrimitiveSchema, ObjectSchema, ArraySchema))
            else schema_from_json(value)
            for key, value in schema.items()
        })
    except ValidationError:
        return None


def _build_display_text(
    properties: Dict[str, SchemaNode],
    full_details: bool,
    definitions: CaseInsensitiveDict,
    display_rows: List[str],
    depth: int = 0,
) -> None:
    for name, node in properties.items():
        label = f"<em>{escape(name)}</em>"

        if isinstance(node, ArraySchema):
            item_type = item_type_of(node.items)
            suffix = f" ({escape(item_type)})" if item_type else ""
            display_rows.append(_span(depth, f"{label} - array{suffix}"))
            inner = node.items
            while isinstance(inner, ArraySchema):
                inner = inner.items
            if isinstance(inner, ObjectSchema) and inner.properties:
                _build_display_text(inner.properties, full_details, definitions, display_rows, depth + 1)
            continue

        if isinstance(node, ObjectSchema):
            display_rows.append(_span(depth, f"{label} - object"))
            if node.properties:
                _build_display_text(node.properties, full_details, definitions, display_rows, depth + 1)
            continue

        if isinstance(node, ReferenceSchema):
            reference = node.definition_name
            data_type = type_label(schema_type(resolve_reference(reference, definitions))) or "object"
            fmt, pattern = "", ""
        else:
            reference = ""
            data_type = type_label(node.type) or "object"
            fmt = node.format or ""
            pattern = node.pattern or ""

        if pattern and full_details:
            pattern = f"; Pattern: {pattern}" if (fmt or reference) else f"Pattern: {pattern}"
        else:
            pattern = ""

        modifier = ""
        if fmt or reference or pattern:
            modifier = f" ({escape(fmt)}{escape(reference)}{escape(pattern)})"
        display_rows.append(_span(depth, f"{label} - {escape(data_type)}{modifier}"))


def contract_details(schema: Union[str, Mapping[str, Any], None], full_details: bool = False) -> str:
    """
    Render the Contract model of a parsed schema map as HTML spans.

    Args:
        schema: Map of model name -> schema (variants or raw JSON), or a
            contract string to parse first
        full_details: Also show each property's pattern

    Returns:
        Concatenated span fragments; "" when there is no Contract model.
    """
    models = _as_schema_map(schema)
    if not models or CONTRACT_KEY not in models:
        return ""

    contract = models[CONTRACT_KEY]
    if not isinstance(contract, ObjectSchema) or not contract.properties:
        return ""

    display_rows: List[str] = []
    _build_display_text(contract.properties, full_details, models, display_rows)
    return "".join(display_rows)
