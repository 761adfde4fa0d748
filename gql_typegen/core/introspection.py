"""Pydantic models for the raw introspection document.

These mirror the JSON produced by the standard introspection query
(``{"data": {"__schema": ...}}``) and only enforce its shape. The parser
converts them into the IR in ``ir.py``.
"""

from typing import Annotated, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .ir import TypeKind

T = TypeVar("T")

# Introspection reports absent descriptions and non-applicable payloads as null
Description = Annotated[str, BeforeValidator(lambda v: "" if v is None else v)]
NullableList = Annotated[list[T], BeforeValidator(lambda v: [] if v is None else v)]


class WireModel(BaseModel):
    """Base model: accept aliases and field names, ignore unknown keys."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WireTypeRef(WireModel):
    kind: TypeKind
    name: Optional[str] = None
    of_type: Optional["WireTypeRef"] = Field(default=None, alias="ofType")


class WireInputValue(WireModel):
    name: str
    description: Description = ""
    type: WireTypeRef
    default_value: Optional[str] = Field(default=None, alias="defaultValue")


class WireField(WireModel):
    name: str
    description: Description = ""
    args: NullableList[WireInputValue] = Field(default_factory=list)
    type: WireTypeRef
    is_deprecated: bool = Field(default=False, alias="isDeprecated")
    deprecation_reason: Optional[str] = Field(default=None, alias="deprecationReason")


class WireEnumValue(WireModel):
    name: str
    description: Description = ""
    is_deprecated: bool = Field(default=False, alias="isDeprecated")
    deprecation_reason: Optional[str] = Field(default=None, alias="deprecationReason")


class WireType(WireModel):
    kind: TypeKind
    name: str
    description: Description = ""
    fields: NullableList[WireField] = Field(default_factory=list)
    input_fields: NullableList[WireInputValue] = Field(default_factory=list, alias="inputFields")
    interfaces: NullableList[WireTypeRef] = Field(default_factory=list)
    enum_values: NullableList[WireEnumValue] = Field(default_factory=list, alias="enumValues")
    possible_types: NullableList[WireTypeRef] = Field(default_factory=list, alias="possibleTypes")


class WireTypeName(WireModel):
    name: str


class WireSchema(WireModel):
    query_type: Optional[WireTypeName] = Field(default=None, alias="queryType")
    mutation_type: Optional[WireTypeName] = Field(default=None, alias="mutationType")
    subscription_type: Optional[WireTypeName] = Field(default=None, alias="subscriptionType")
    types: list[WireType]


class WireData(WireModel):
    introspected_schema: WireSchema = Field(alias="__schema")


class IntrospectionDocument(WireModel):
    """Root of an introspection response: ``{"data": {"__schema": ...}}``."""
    data: WireData
