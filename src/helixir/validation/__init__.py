"""Answer validation for helixir lessons.

Parses schema.hx and queries.hx files into entity models and diffs a
learner's models against the reference answer.
"""

from helixir.validation.models import (
    Property,
    NodeDef,
    EdgeDef,
    VectorDef,
    SchemaModel,
    QuerySignature,
    QueryModel,
)
from helixir.validation.parser import (
    parse_schema,
    parse_queries,
    read_hx_file,
    load_schema,
    load_queries,
)
from helixir.validation.diff import (
    PropertyErrors,
    EdgeErrors,
    SchemaDiffReport,
    QueryDiffReport,
    diff_properties,
    diff_schema,
    diff_queries,
    normalize_query_body,
)
from helixir.validation.feedback import (
    schema_feedback,
    query_feedback,
)

__all__ = [
    # Models
    "Property",
    "NodeDef",
    "EdgeDef",
    "VectorDef",
    "SchemaModel",
    "QuerySignature",
    "QueryModel",
    # Parser
    "parse_schema",
    "parse_queries",
    "read_hx_file",
    "load_schema",
    "load_queries",
    # Diff
    "PropertyErrors",
    "EdgeErrors",
    "SchemaDiffReport",
    "QueryDiffReport",
    "diff_properties",
    "diff_schema",
    "diff_queries",
    "normalize_query_body",
    # Feedback
    "schema_feedback",
    "query_feedback",
]
