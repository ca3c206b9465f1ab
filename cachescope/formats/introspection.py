"""Pydantic models for the standard GraphQL introspection result (``__schema``)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class IntrospectionNamedRef(BaseModel):
    name: str


class IntrospectionTypeRef(BaseModel):
    kind: str
    name: str | None = None
    of_type: IntrospectionTypeRef | None = Field(default=None, alias="ofType")

    model_config = {"populate_by_name": True}


class IntrospectionField(BaseModel):
    name: str
    description: str | None = None
    type: IntrospectionTypeRef
    # Input values carry no deprecation flag on older servers
    is_deprecated: bool | None = Field(default=False, alias="isDeprecated")

    model_config = {"populate_by_name": True}


class IntrospectionEnumValue(BaseModel):
    name: str
    description: str | None = None
    is_deprecated: bool | None = Field(default=False, alias="isDeprecated")

    model_config = {"populate_by_name": True}


class IntrospectionType(BaseModel):
    kind: str
    name: str
    description: str | None = None
    fields: list[IntrospectionField] | None = None
    input_fields: list[IntrospectionField] | None = Field(default=None, alias="inputFields")
    enum_values: list[IntrospectionEnumValue] | None = Field(default=None, alias="enumValues")
    interfaces: list[IntrospectionNamedRef] | None = None
    possible_types: list[IntrospectionNamedRef] | None = Field(default=None, alias="possibleTypes")

    model_config = {"populate_by_name": True}


class IntrospectionSchema(BaseModel):
    """The ``__schema`` object.

    ``types`` stays raw so that each entry can be validated on its own and a
    single malformed entry does not reject the whole schema.
    """

    query_type: IntrospectionNamedRef | None = Field(default=None, alias="queryType")
    mutation_type: IntrospectionNamedRef | None = Field(default=None, alias="mutationType")
    subscription_type: IntrospectionNamedRef | None = Field(
        default=None, alias="subscriptionType"
    )
    types: list[Any]

    model_config = {"populate_by_name": True}

    @field_validator("query_type", "mutation_type", "subscription_type", mode="before")
    @classmethod
    def _lenient_root(cls, value: Any) -> Any:
        # Relay-style servers sometimes rename or null out the root types
        if isinstance(value, dict) and isinstance(value.get("name"), str):
            return value
        return None
