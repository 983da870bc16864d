"""Entity models for parsed HelixQL schema and query files.

A parsed schema.hx becomes a SchemaModel of node, edge and vector
definitions; a parsed queries.hx becomes a QueryModel of query signatures.
Both are value objects: built once per check and never mutated.
"""

from dataclasses import dataclass, field
from typing import Iterable


# --- Properties ---


@dataclass(frozen=True)
class Property:
    """A single declared field, e.g. ``name: String``."""

    name: str
    declared_type: str


def _unique_by_name(properties: Iterable[Property]) -> frozenset[Property]:
    """Collapse properties to one per name, the last declaration winning."""
    by_name: dict[str, Property] = {}
    for prop in properties:
        by_name[prop.name] = prop
    return frozenset(by_name.values())


def property_types(properties: Iterable[Property]) -> dict[str, str]:
    """Map property name to declared type."""
    return {prop.name: prop.declared_type for prop in properties}


# --- Schema entities ---


@dataclass(frozen=True)
class NodeDef:
    """An ``N::Name { ... }`` block."""

    name: str
    properties: frozenset[Property] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", _unique_by_name(self.properties))


@dataclass(frozen=True)
class VectorDef:
    """A ``V::Name { ... }`` block."""

    name: str
    properties: frozenset[Property] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", _unique_by_name(self.properties))


@dataclass(frozen=True)
class EdgeDef:
    """An ``E::Name { From: X, To: Y, Properties: { ... } }`` block.

    Only fields declared inside the ``Properties:`` sub-block belong to the
    edge; ``From`` and ``To`` are endpoints, not properties.
    """

    name: str
    from_type: str = ""
    to_type: str = ""
    properties: frozenset[Property] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", _unique_by_name(self.properties))


@dataclass(frozen=True)
class SchemaModel:
    """Name-keyed node, edge and vector definitions from one schema file.

    Names are unique within each mapping. A node and a vector may share a name.
    """

    nodes: dict[str, NodeDef] = field(default_factory=dict)
    edges: dict[str, EdgeDef] = field(default_factory=dict)
    vectors: dict[str, VectorDef] = field(default_factory=dict)


# --- Queries ---


@dataclass(frozen=True)
class QuerySignature:
    """A ``QUERY name(params) =>`` definition and its body.

    ``parameters`` is the raw text between the parentheses and is compared
    verbatim. ``body`` holds the operation lines joined by newlines.
    """

    name: str
    parameters: str
    body: str


@dataclass(frozen=True)
class QueryModel:
    """Name-keyed query signatures from one queries file."""

    queries: dict[str, QuerySignature] = field(default_factory=dict)
