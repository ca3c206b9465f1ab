"""Shared test fixtures for cachescope tests."""

from __future__ import annotations

from typing import Any

import pytest

from cachescope.commands.schema.ingest import load_sdl
from cachescope.commands.schema.types import ParsedSchema

USER_SDL = """
type Query {
  user(id: ID!): User
}

type User {
  id: ID!
  name: String!
  friend: User
}
"""

SHOP_SDL = """
scalar DateTime
scalar UUID

interface Node {
  id: ID!
}

enum OrderStatus {
  PENDING
  SHIPPED
}

type Query {
  node(id: ID!): Node
  orders: OrderConnection
}

type Mutation {
  placeOrder(input: OrderInput!): Order
}

type Customer implements Node {
  id: ID!
  name: String
  email: String
  orders: [Order!]!
}

type Order implements Node {
  id: ID!
  reference: UUID
  status: OrderStatus!
  placedAt: DateTime
  customer: Customer
  lines: [OrderLine!]!
  payment: Payment
}

type OrderLine {
  sku: String!
  quantity: Int!
  price: Float
}

type Card {
  last4: String!
  brand: String
}

type Voucher {
  code: String!
  amount: Float!
}

union Payment = Card | Voucher

type OrderEdge {
  node: Order
  cursor: String!
}

type PageInfo {
  hasNextPage: Boolean!
}

type OrderConnection {
  edges: [OrderEdge]
  pageInfo: PageInfo!
}

input OrderInput {
  customerId: ID!
  note: String
}
"""

PETS_SDL = """
type Query {
  owner: Owner
}

type Cat {
  name: String!
  lives: Int
}

type Dog {
  name: String!
  goodBoy: Boolean
}

union Pet = Cat | Dog

type Owner {
  id: ID!
  pets: [Pet!]!
  favorite: Pet
}
"""


def make_introspection(types: list[dict[str, Any]], **roots: str) -> dict[str, Any]:
    """Wrap raw type entries in an introspection ``__schema`` payload."""
    schema: dict[str, Any] = {"types": types}
    for key in ("queryType", "mutationType", "subscriptionType"):
        schema[key] = {"name": roots[key]} if key in roots else None
    return {"__schema": schema}


def named(kind: str, name: str) -> dict[str, Any]:
    return {"kind": kind, "name": name, "ofType": None}


def non_null(inner: dict[str, Any]) -> dict[str, Any]:
    return {"kind": "NON_NULL", "name": None, "ofType": inner}


def list_of(inner: dict[str, Any]) -> dict[str, Any]:
    return {"kind": "LIST", "name": None, "ofType": inner}


def make_field(name: str, type_ref: dict[str, Any], deprecated: bool = False) -> dict[str, Any]:
    return {
        "name": name,
        "description": None,
        "type": type_ref,
        "isDeprecated": deprecated,
        "args": [],
    }


@pytest.fixture
def user_schema() -> ParsedSchema:
    return load_sdl(USER_SDL)


@pytest.fixture
def shop_schema() -> ParsedSchema:
    return load_sdl(SHOP_SDL)


@pytest.fixture
def pets_schema() -> ParsedSchema:
    return load_sdl(PETS_SDL)


@pytest.fixture
def sample_cache() -> dict[str, Any]:
    return {
        "User:1": {"__typename": "User", "id": "1", "name": "Ann"},
        "User:2": {"__typename": "User", "id": "2", "email": "b@x.com"},
        "Order:9": {
            "__typename": "Order",
            "id": "9",
            "customer": {"__ref": "Customer:3"},
        },
        "Customer:3": {"__typename": "Customer", "id": "3", "name": "Carol"},
        "ROOT_QUERY": {"__typename": "Query", "user": {"__ref": "User:1"}},
        "ROOT_MUTATION": {"__typename": "Mutation"},
        "__META": {"extraRootIds": []},
    }
