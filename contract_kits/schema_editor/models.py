"""
Pydantic models for the schema editor.

Two families live here:

- The editing side (``Row``, ``ModelOption``, ``OptionValue``) mirrors the
  camelCase shapes the UI sends and receives.
- The storage side is a tagged variant over JSON-Schema objects
  (``ReferenceSchema | PrimitiveSchema | ObjectSchema | ArraySchema``). The
  parser infers the tag from which keys are present; every variant renders
  itself back to plain JSON with ``to_json()``.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def format_reference_name(ref: str) -> str:
    """Strip the pointer prefix from a reference string.

    ``"#/Guid"`` and ``"#/definitions/Guid"`` both become ``"Guid"``; a bare
    name is returned unchanged.
    """
    if not ref:
        return ""
    return ref.lstrip("#").rstrip("/").split("/")[-1]


TypeValue = Union[str, List[str]]


def type_label(value: Optional[TypeValue]) -> Optional[str]:
    """Readable form of a "type" keyword; a union such as ["string", "null"] reads "string | null"."""
    if isinstance(value, list):
        return " | ".join(str(part) for part in value) or None
    return value


class Row(BaseModel):
    """Editing-side projection of one schema property."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field("", description="Property key among its siblings")
    row_id: Optional[Union[int, str]] = Field(None, alias="rowId", description="UI-session identity, never persisted")
    type: Optional[TypeValue] = None
    format: Optional[str] = None
    pattern: Optional[str] = None
    example: Any = None
    reference: Optional[str] = Field(None, description="Definition name without the '#/' prefix")
    ref: Optional[str] = Field(None, alias="$ref", description="Raw pointer supplied directly by the UI")
    is_locked: Optional[bool] = Field(None, alias="isLocked")
    parent_id: Optional[Union[int, str]] = Field(None, alias="parentId")
    items: Optional[Row] = Field(None, description="Item descriptor of an array row")
    properties: Optional[List[Row]] = None

    def to_wire(self) -> Dict[str, Any]:
        """Render the camelCase dict the UI works with."""
        return self.model_dump(by_alias=True, exclude_none=True)


class OptionValue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_name: Optional[str] = Field(None, alias="schemaName")
    schema_string: Optional[str] = Field(None, alias="schemaString")


class ModelOption(BaseModel):
    """Selectable type option offered when a field is defined."""

    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(..., alias="displayName")
    id: Union[int, str] = 0
    value: Optional[OptionValue] = None

    @property
    def is_sentinel(self) -> bool:
        return isinstance(self.id, int) and not isinstance(self.id, bool) and self.id == 0

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


RowLike = Union[Row, Mapping[str, Any]]
OptionLike = Union[ModelOption, Mapping[str, Any]]


def as_row(value: RowLike) -> Row:
    if isinstance(value, Row):
        return value
    return Row.model_validate(value)


def as_rows(values: Optional[Iterable[RowLike]]) -> List[Row]:
    return [as_row(v) for v in (values or [])]


def as_option(value: OptionLike) -> ModelOption:
    if isinstance(value, ModelOption):
        return value
    return ModelOption.model_validate(value)


# --- storage-side variants ---------------------------------------------------

class ReferenceSchema(BaseModel):
    """Pointer to a named definition; carries nothing else in storage."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["reference"] = "reference"
    ref: str = Field(..., alias="$ref")

    @property
    def definition_name(self) -> str:
        return format_reference_name(self.ref)

    def to_json(self) -> Dict[str, Any]:
        return {"$ref": self.ref}


class PrimitiveSchema(BaseModel):
    """Scalar property, optionally with a fixed format."""

    model_config = ConfigDict(extra="allow")

    kind: Literal["primitive"] = "primitive"
    type: Optional[TypeValue] = None
    format: Optional[str] = None
    pattern: Optional[str] = None
    example: Any = None

    def to_json(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key in ("type", "format", "pattern", "example"):
            if key in self.model_fields_set:
                out[key] = getattr(self, key)
        out.update(self.model_extra or {})
        return out


class ObjectSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    kind: Literal["object"] = "object"
    type: str = "object"
    properties: Optional[Dict[str, SchemaNode]] = None

    def to_json(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        out.update(self.model_extra or {})
        if self.properties is not None:
            out["properties"] = {key: node.to_json() for key, node in self.properties.items()}
        return out


class ArraySchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    kind: Literal["array"] = "array"
    type: str = "array"
    items: Optional[SchemaNode] = None

    def to_json(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        out.update(self.model_extra or {})
        if self.items is not None:
            out["items"] = self.items.to_json()
        return out


SchemaNode = Union[ReferenceSchema, PrimitiveSchema, ObjectSchema, ArraySchema]

Row.model_rebuild()
ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()
