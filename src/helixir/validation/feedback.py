"""Learner-facing feedback lines for diff reports.

Each line starts with a tag the CLI colours: [CORRECT], [INCORRECT] or [ERROR].
"""

from helixir.validation.diff import (
    EdgeErrors,
    PropertyErrors,
    QueryDiffReport,
    SchemaDiffReport,
)

CORRECT = "[CORRECT]"
INCORRECT = "[INCORRECT]"
ERROR = "[ERROR]"


def _names(values: list[str]) -> str:
    return ", ".join(values)


def _property_lines(errors: PropertyErrors) -> list[str]:
    lines = []
    if errors.missing:
        lines.append(f"{ERROR} Missing properties: {_names(errors.missing)}")
    if errors.extra:
        lines.append(f"{ERROR} Extra properties: {_names(errors.extra)}")
    for name, expected, got in errors.wrong_type:
        lines.append(
            f"{ERROR} Property '{name}' has wrong type: expected '{expected}', got '{got}'"
        )
    return lines


def _edge_lines(errors: EdgeErrors) -> list[str]:
    lines = []
    if errors.from_type_mismatch is not None:
        got, expected = errors.from_type_mismatch
        lines.append(f"{ERROR} From type mismatch: expected '{expected}', got '{got}'")
    if errors.to_type_mismatch is not None:
        got, expected = errors.to_type_mismatch
        lines.append(f"{ERROR} To type mismatch: expected '{expected}', got '{got}'")
    lines.extend(_property_lines(errors.property_errors))
    return lines


def schema_feedback(report: SchemaDiffReport) -> list[str]:
    """Render a schema report as feedback lines, most important first."""
    if report.is_correct:
        return [f"{CORRECT} Schema passed, good job!"]

    lines = [f"{INCORRECT} Try again! Here is what might be wrong:"]

    if report.missing_nodes:
        lines.append(f"{ERROR} Missing nodes: {_names(report.missing_nodes)}")
    for name, errors in report.node_errors.items():
        lines.append(f"{ERROR} Node '{name}':")
        lines.extend(_property_lines(errors))

    if report.missing_edges:
        lines.append(f"{ERROR} Missing edges: {_names(report.missing_edges)}")
    for name, edge_errors in report.edge_errors.items():
        lines.append(f"{ERROR} Edge '{name}':")
        lines.extend(_edge_lines(edge_errors))

    if report.missing_vectors:
        lines.append(f"{ERROR} Missing vectors: {_names(report.missing_vectors)}")
    for name, errors in report.vector_errors.items():
        lines.append(f"{ERROR} Vector '{name}':")
        lines.extend(_property_lines(errors))

    return lines


def query_feedback(report: QueryDiffReport) -> list[str]:
    """Render a query report as feedback lines."""
    if report.is_correct:
        return [f"{CORRECT} Queries match the expected answer!"]

    lines = [f"{INCORRECT} Query validation failed:"]
    if report.missing_queries:
        lines.append(f"{ERROR} Missing queries: {_names(report.missing_queries)}")
    for name, message in report.query_errors.items():
        lines.append(f"{ERROR} Query '{name}': {message}")
    return lines
