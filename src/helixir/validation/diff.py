"""Structural diff of a learner's answer against the reference answer.

Schema diffs compare entity names per category, then properties per matched
entity. Properties are keyed by name only, so a property whose type differs
is reported once as a wrong type rather than as both missing and extra.

Query diffs compare parameter lists verbatim and bodies after a light
whitespace normalisation. Body comparison is textual: equivalent queries
written differently are reported as different.

Extra entities are listed for feedback but never make an answer incorrect.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from loguru import logger

from helixir.validation.models import (
    EdgeDef,
    Property,
    QueryModel,
    SchemaModel,
    property_types,
)


# --- Result Data Model ---


@dataclass(frozen=True)
class PropertyErrors:
    """Property differences for one node, vector or edge."""

    missing: list[str] = field(default_factory=list)
    extra: list[str] = field(default_factory=list)
    wrong_type: list[tuple[str, str, str]] = field(default_factory=list)  # (name, expected, got)

    @property
    def is_empty(self) -> bool:
        return not (self.missing or self.extra or self.wrong_type)


@dataclass(frozen=True)
class EdgeErrors:
    """Differences for an edge present in both answers.

    Endpoint mismatches are (user_value, expected_value) pairs.
    """

    from_type_mismatch: Optional[tuple[str, str]] = None
    to_type_mismatch: Optional[tuple[str, str]] = None
    property_errors: PropertyErrors = field(default_factory=PropertyErrors)

    @property
    def is_empty(self) -> bool:
        return (
            self.from_type_mismatch is None
            and self.to_type_mismatch is None
            and self.property_errors.is_empty
        )


@dataclass(frozen=True)
class SchemaDiffReport:
    """Complete schema comparison result."""

    is_correct: bool
    missing_nodes: list[str] = field(default_factory=list)
    extra_nodes: list[str] = field(default_factory=list)
    node_errors: dict[str, PropertyErrors] = field(default_factory=dict)
    missing_edges: list[str] = field(default_factory=list)
    extra_edges: list[str] = field(default_factory=list)
    edge_errors: dict[str, EdgeErrors] = field(default_factory=dict)
    missing_vectors: list[str] = field(default_factory=list)
    extra_vectors: list[str] = field(default_factory=list)
    vector_errors: dict[str, PropertyErrors] = field(default_factory=dict)


@dataclass(frozen=True)
class QueryDiffReport:
    """Complete query comparison result.

    ``query_errors`` maps a query name to a readable description of what
    differs. Extra queries are not tracked.
    """

    is_correct: bool
    missing_queries: list[str] = field(default_factory=list)
    query_errors: dict[str, str] = field(default_factory=dict)


# --- Helpers ---


def _name_diff(user: Iterable[str], expected: Iterable[str]) -> tuple[list[str], list[str]]:
    """Return (missing, extra) name lists, sorted."""
    user_names = set(user)
    expected_names = set(expected)
    return sorted(expected_names - user_names), sorted(user_names - expected_names)


def diff_properties(
    user: Iterable[Property],
    expected: Iterable[Property],
) -> PropertyErrors:
    """Compare two property sets by name.

    Names on both sides with different declared types become
    (name, expected_type, user_type) triples and are not counted as
    missing or extra.
    """
    user_types = property_types(user)
    expected_types = property_types(expected)

    missing, extra = _name_diff(user_types, expected_types)
    wrong_type = [
        (name, expected_types[name], user_types[name])
        for name in sorted(user_types.keys() & expected_types.keys())
        if user_types[name] != expected_types[name]
    ]
    return PropertyErrors(missing=missing, extra=extra, wrong_type=wrong_type)


def _diff_edge(user: EdgeDef, expected: EdgeDef) -> EdgeErrors:
    from_mismatch = None
    if user.from_type != expected.from_type:
        from_mismatch = (user.from_type, expected.from_type)

    to_mismatch = None
    if user.to_type != expected.to_type:
        to_mismatch = (user.to_type, expected.to_type)

    return EdgeErrors(
        from_type_mismatch=from_mismatch,
        to_type_mismatch=to_mismatch,
        property_errors=diff_properties(user.properties, expected.properties),
    )


def normalize_query_body(body: str) -> str:
    """Trim every line, drop blank ones and join with single spaces."""
    return " ".join(line.strip() for line in body.splitlines() if line.strip())


# --- Schema diff ---


def diff_schema(user: SchemaModel, expected: SchemaModel) -> SchemaDiffReport:
    """Compare a learner's schema against the reference schema.

    Args:
        user: The learner's parsed schema.
        expected: The reference answer's parsed schema.

    Returns:
        A SchemaDiffReport. ``is_correct`` is True when nothing expected is
        missing and no shared entity differs; extra entities are allowed.
    """
    missing_nodes, extra_nodes = _name_diff(user.nodes, expected.nodes)
    node_errors: dict[str, PropertyErrors] = {}
    for name in sorted(user.nodes.keys() & expected.nodes.keys()):
        errors = diff_properties(user.nodes[name].properties, expected.nodes[name].properties)
        if not errors.is_empty:
            node_errors[name] = errors

    missing_edges, extra_edges = _name_diff(user.edges, expected.edges)
    edge_errors: dict[str, EdgeErrors] = {}
    for name in sorted(user.edges.keys() & expected.edges.keys()):
        errors = _diff_edge(user.edges[name], expected.edges[name])
        if not errors.is_empty:
            edge_errors[name] = errors

    missing_vectors, extra_vectors = _name_diff(user.vectors, expected.vectors)
    vector_errors: dict[str, PropertyErrors] = {}
    for name in sorted(user.vectors.keys() & expected.vectors.keys()):
        errors = diff_properties(
            user.vectors[name].properties, expected.vectors[name].properties
        )
        if not errors.is_empty:
            vector_errors[name] = errors

    is_correct = not (
        missing_nodes
        or node_errors
        or missing_edges
        or edge_errors
        or missing_vectors
        or vector_errors
    )
    logger.debug(f"Schema diff complete: is_correct={is_correct}")

    return SchemaDiffReport(
        is_correct=is_correct,
        missing_nodes=missing_nodes,
        extra_nodes=extra_nodes,
        node_errors=node_errors,
        missing_edges=missing_edges,
        extra_edges=extra_edges,
        edge_errors=edge_errors,
        missing_vectors=missing_vectors,
        extra_vectors=extra_vectors,
        vector_errors=vector_errors,
    )


# --- Query diff ---


def diff_queries(user: QueryModel, expected: QueryModel) -> QueryDiffReport:
    """Compare a learner's queries against the reference queries.

    Parameters must match exactly, including case and spacing. Bodies must
    match after ``normalize_query_body``.

    Args:
        user: The learner's parsed queries.
        expected: The reference answer's parsed queries.

    Returns:
        A QueryDiffReport listing missing queries and per-query differences.
    """
    missing_queries, _ = _name_diff(user.queries, expected.queries)
    query_errors: dict[str, str] = {}

    for name in sorted(user.queries.keys() & expected.queries.keys()):
        user_query = user.queries[name]
        expected_query = expected.queries[name]
        problems: list[str] = []

        if user_query.parameters != expected_query.parameters:
            problems.append(
                f"Parameters mismatch. Expected: ({expected_query.parameters}), "
                f"Got: ({user_query.parameters})"
            )

        if normalize_query_body(user_query.body) != normalize_query_body(expected_query.body):
            problems.append("Query body differs from expected implementation")

        if problems:
            query_errors[name] = ". ".join(problems)

    is_correct = not (missing_queries or query_errors)
    logger.debug(f"Query diff complete: is_correct={is_correct}")

    return QueryDiffReport(
        is_correct=is_correct,
        missing_queries=missing_queries,
        query_errors=query_errors,
    )
