"""
Contract Schema Parser

Turn a contract string into the row tree the editor works on.

A contract document maps model names to JSON-Schema objects. The entry keyed
"Contract" is the root; every other entry is a reusable definition reached
through "$ref": "#/<Name>" pointers. Rows never copy a definition's body:
a referencing row only inherits type/pattern/format for display and is
marked locked.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .case_insensitive import CaseInsensitiveDict
from .error_taxonomy import SchemaEditorErrorTaxonomy
from .models import (
    ArraySchema,
    ObjectSchema,
    PrimitiveSchema,
    ReferenceSchema,
    Row,
    SchemaNode,
    type_label,
)

logger = logging.getLogger(__name__)

CONTRACT_KEY = "Contract"


@dataclass(frozen=True)
class ParsedContract:
    document: Dict[str, Any]
    contract_key: str
    contract: SchemaNode
    definitions: CaseInsensitiveDict


def _log_failure(error_code: str, error: str) -> None:
    logger.warning(json.dumps({
        "event": "contract_parse_failed",
        "error_code": error_code,
        "severity": SchemaEditorErrorTaxonomy.severity_level(error_code),
        "error": error,
    }))


def _invalid(error_code: str, error: str) -> Dict[str, Any]:
    _log_failure(error_code, error)
    return {
        'status': 'invalid',
        'error_code': error_code,
        'error': error,
        'user_message': SchemaEditorErrorTaxonomy.user_message(error_code),
    }


def parse_contract_document(contract_string: str) -> Dict[str, Any]:
    """
    Decode a contract string and check its top-level shape.

    Returns:
        Dict with keys:
        - status: 'valid' | 'invalid'
        - document: decoded JSON (if status='valid')
        - contract_key: spelling of the Contract key in the document
        - error_code / error: (if status='invalid') taxonomy code and message
        - user_message: (if status='invalid') text the UI can show as-is
    """
    try:
        document = json.loads(contract_string)
    except (TypeError, ValueError) as e:
        return _invalid('malformed_json', str(e))

    if not isinstance(document, dict):
        return _invalid('missing_contract', 'Top-level JSON value is not an object')

    lookup = CaseInsensitiveDict(document)
    if not isinstance(lookup.get(CONTRACT_KEY), dict):
        return _invalid('missing_contract', 'No "Contract" object at the top level')

    return {
        'status': 'valid',
        'document': document,
        'contract_key': lookup.original_key(CONTRACT_KEY),
    }


def schema_from_json(raw: Any) -> SchemaNode:
    """Infer the schema variant of a raw JSON object.

    Priority: $ref > format > object > array > primitive.
    """
    if not isinstance(raw, dict):
        return PrimitiveSchema()

    if raw.get("$ref"):
        return ReferenceSchema(ref=raw["$ref"])

    if raw.get("format"):
        return PrimitiveSchema.model_validate(raw)

    declared = raw.get("type")
    if declared == "object" or (declared is None and "properties" in raw):
        body = {k: v for k, v in raw.items() if k not in ("type", "properties")}
        props = raw.get("properties")
        if isinstance(props, dict):
            body["properties"] = {key: schema_from_json(value) for key, value in props.items()}
        return ObjectSchema.model_validate(body)

    if declared == "array" or (declared is None and "items" in raw):
        body = {k: v for k, v in raw.items() if k not in ("type", "items")}
        if "items" in raw:
            body["items"] = schema_from_json(raw["items"])
        return ArraySchema.model_validate(body)

    return PrimitiveSchema.model_validate(raw)


def schema_type(node: Optional[SchemaNode]) -> Optional[str]:
    if node is None or isinstance(node, ReferenceSchema):
        return None
    return node.type


def resolve_reference(name: str, definitions: CaseInsensitiveDict) -> Optional[SchemaNode]:
    """Follow a definition name (and any reference chain) to a concrete schema."""
    seen = set()
    node = definitions.get(name)
    while isinstance(node, ReferenceSchema):
        target = node.definition_name.lower()
        if target in seen:
            return None
        seen.add(target)
        node = definitions.get(target)
    return node


def item_type_of(node: Optional[SchemaNode]) -> Optional[str]:
    """Display type of an array item: reference name (lower-cased), else format, else type."""
    if node is None:
        return None
    if isinstance(node, ReferenceSchema):
        return node.definition_name.lower()
    if isinstance(node, PrimitiveSchema):
        return node.format or type_label(node.type)
    return node.type


def row_from_schema(name: str, node: SchemaNode, definitions: CaseInsensitiveDict) -> Row:
    """Project one schema variant (and its children) onto a Row."""
    if isinstance(node, ReferenceSchema):
        reference = node.definition_name
        fields: Dict[str, Any] = {"name": name, "reference": reference, "is_locked": True}
        target = resolve_reference(reference, definitions)
        if target is not None:
            fields["type"] = schema_type(target)
            if isinstance(target, PrimitiveSchema):
                fields["pattern"] = target.pattern
                fields["format"] = target.format
        return Row(**fields)

    if isinstance(node, ObjectSchema):
        children = [row_from_schema(key, child, definitions) for key, child in (node.properties or {}).items()]
        return Row(name=name, type="object", properties=children)

    if isinstance(node, ArraySchema):
        if node.items is None:
            return Row(name=name, type="array")
        # Children of the innermost object item live on the array row, also for arrays of arrays.
        item_row = row_from_schema("", node.items, definitions)
        return Row(
            name=name,
            type="array",
            items=item_row.model_copy(update={"properties": None}),
            properties=item_row.properties,
        )

    fields = {"name": name}
    for key in ("type", "format", "pattern", "example"):
        if key in node.model_fields_set:
            fields[key] = getattr(node, key)
    if node.format:
        fields["is_locked"] = True
    return Row(**fields)


def load_contract(contract_string: str) -> Optional[ParsedContract]:
    """Parse a contract string into its document, root schema and definitions.

    Returns None (after logging) when the string cannot be used.
    """
    result = parse_contract_document(contract_string)
    if result['status'] != 'valid':
        return None

    document = result['document']
    contract_key = result['contract_key']
    try:
        definitions = CaseInsensitiveDict({
            key: schema_from_json(value) for key, value in document.items() if key != contract_key
        })
        contract = schema_from_json(document[contract_key])
    except ValidationError as e:
        _log_failure('invalid_schema', str(e))
        return None

    return ParsedContract(
        document=document,
        contract_key=contract_key,
        contract=contract,
        definitions=definitions,
    )


def parse_contract_array(contract_string: str) -> Optional[List[Row]]:
    """Parse a contract string into its ordered row tree.

    Returns None for malformed JSON or a document without a Contract model.
    """
    parsed = load_contract(contract_string)
    if parsed is None:
        return None
    if not isinstance(parsed.contract, ObjectSchema):
        return []
    return [
        row_from_schema(key, node, parsed.definitions)
        for key, node in (parsed.contract.properties or {}).items()
    ]


def parse_schema(contract_string: str) -> Optional[CaseInsensitiveDict]:
    """Parse every top-level model of a contract string into schema variants."""
    parsed = load_contract(contract_string)
    if parsed is None:
        return None
    schema = CaseInsensitiveDict()
    for key in parsed.document:
        schema[key] = parsed.contract if key == parsed.contract_key else parsed.definitions[key]
    return schema
