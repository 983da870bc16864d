"""Line-oriented parsers for the HelixQL schema and query files.

Both parsers are tolerant scanners rather than grammars. Anything they do not
recognise is skipped, so a half-finished submission still yields a model that
can be diffed against the reference answer.

Schema syntax handled:
  N::Name {                     node block
      field: Type,
  }
  E::Name {                     edge block
      From: Node,
      To: Node,
      Properties: {
          field: Type
      }
  }
  V::Name {                     vector block
      field: Type
  }

Query syntax handled:
  // comment
  QUERY name(param: Type, ...) =>
      body line
      RETURN value
"""

from pathlib import Path
from typing import Iterator, Optional, Union

from loguru import logger

from helixir.errors import HxFileError
from helixir.validation.models import (
    EdgeDef,
    NodeDef,
    Property,
    QueryModel,
    QuerySignature,
    SchemaModel,
    VectorDef,
)


BLOCK_PREFIXES = {
    "N::": "node",
    "E::": "edge",
    "V::": "vector",
}

QUERY_PREFIX = "QUERY "
QUERY_ARROW = " =>"
COMMENT_PREFIX = "//"


# --- File access ---


def read_hx_file(path: Union[str, Path]) -> str:
    """Read a .hx file as text.

    Raises:
        HxFileError: If the file is missing, unreadable or not valid UTF-8.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise HxFileError(path, e) from e


def load_schema(path: Union[str, Path]) -> SchemaModel:
    """Read and parse a schema file."""
    return parse_schema(read_hx_file(path))


def load_queries(path: Union[str, Path]) -> QueryModel:
    """Read and parse a queries file."""
    return parse_queries(read_hx_file(path))


# --- Schema parsing ---


def _detect_block(line: str) -> Optional[tuple[str, str]]:
    """Return (kind, rest-of-line) when the line opens a schema block."""
    for prefix, kind in BLOCK_PREFIXES.items():
        if line.startswith(prefix):
            return kind, line[len(prefix) :]
    return None


def _clean_type(value: str) -> str:
    """Trim an edge field value and drop its trailing separator commas."""
    return value.strip().rstrip(",").strip()


def _split_field(line: str) -> Optional[tuple[str, str]]:
    """Split ``name: type`` at the first colon."""
    if ":" not in line:
        return None
    name, value = line.split(":", 1)
    return name.strip(), value.strip()


def _read_properties(lines: Iterator[str]) -> list[Property]:
    """Consume a node or vector body up to its closing brace.

    Declared types are only trimmed, so a trailing comma stays part of the type.
    """
    properties: list[Property] = []
    for line in lines:
        if line == "}":
            break
        parsed = _split_field(line)
        if parsed is not None:
            properties.append(Property(name=parsed[0], declared_type=parsed[1]))
    return properties


def _read_edge(name: str, lines: Iterator[str]) -> EdgeDef:
    """Consume an edge body up to the first closing brace.

    Fields before the ``Properties:`` marker are endpoints or ignored; fields
    after it belong to the edge.
    """
    from_type = ""
    to_type = ""
    properties: list[Property] = []
    in_properties = False

    for line in lines:
        if line == "}":
            break

        if line.startswith("Properties:"):
            in_properties = True
            continue

        parsed = _split_field(line)
        if parsed is None:
            continue

        field_name, value = parsed[0], _clean_type(parsed[1])
        if field_name == "From":
            from_type = value
        elif field_name == "To":
            to_type = value
        elif in_properties:
            properties.append(Property(name=field_name, declared_type=value))

    return EdgeDef(name=name, from_type=from_type, to_type=to_type, properties=properties)


def parse_schema(text: str) -> SchemaModel:
    """Parse schema.hx text into a SchemaModel.

    Never raises on malformed content. Blocks are a single level deep: the
    first line that is exactly ``}`` closes the open block. A repeated
    definition name replaces the earlier one.

    Args:
        text: Raw schema file contents.

    Returns:
        A SchemaModel with every recognised node, edge and vector block.
    """
    nodes: dict[str, NodeDef] = {}
    edges: dict[str, EdgeDef] = {}
    vectors: dict[str, VectorDef] = {}

    # One shared iterator: block readers consume the lines they own
    lines = (raw.strip() for raw in text.splitlines())

    for line in lines:
        block = _detect_block(line)
        if block is None:
            continue

        kind, rest = block
        brace = rest.find("{")
        if brace == -1:
            continue
        name = rest[:brace].strip()

        if kind == "edge":
            edges[name] = _read_edge(name, lines)
        elif kind == "node":
            nodes[name] = NodeDef(name=name, properties=_read_properties(lines))
        else:
            vectors[name] = VectorDef(name=name, properties=_read_properties(lines))

    logger.debug(
        f"Parsed schema: {len(nodes)} nodes, {len(edges)} edges, {len(vectors)} vectors"
    )
    return SchemaModel(nodes=nodes, edges=edges, vectors=vectors)


# --- Query parsing ---


def _is_skippable(line: str) -> bool:
    return not line or line.startswith(COMMENT_PREFIX)


def _parse_query_header(line: str) -> Optional[tuple[str, str]]:
    """Split a ``QUERY name(params) =>`` header into (name, params).

    The parameter text runs from the first ``(`` to the last ``)`` before the
    arrow, so a type with unbalanced parentheses is cut short.
    """
    arrow = line.find(QUERY_ARROW)
    if arrow == -1:
        return None

    header = line[len(QUERY_PREFIX) : arrow]
    paren = header.find("(")
    if paren == -1:
        return None

    close = header.rfind(")")
    if close == -1:
        close = len(header)

    return header[:paren].strip(), header[paren + 1 : close].strip()


def parse_queries(text: str) -> QueryModel:
    """Parse queries.hx text into a QueryModel.

    Blank lines and ``//`` comment lines are dropped everywhere. A query body
    runs from the line after its header up to the next ``QUERY`` line or the
    end of the file. Headers missing ``=>`` or ``(`` are skipped together with
    their body lines. A repeated query name replaces the earlier one.

    Args:
        text: Raw queries file contents.

    Returns:
        A QueryModel keyed by query name.
    """
    queries: dict[str, QuerySignature] = {}
    lines = [raw.strip() for raw in text.splitlines()]
    i = 0

    while i < len(lines):
        line = lines[i]
        i += 1

        if not line.startswith(QUERY_PREFIX):
            continue

        header = _parse_query_header(line)
        if header is None:
            continue
        name, parameters = header

        body_lines: list[str] = []
        while i < len(lines) and not lines[i].startswith(QUERY_PREFIX):
            if not _is_skippable(lines[i]):
                body_lines.append(lines[i])
            i += 1

        queries[name] = QuerySignature(
            name=name,
            parameters=parameters,
            body="\n".join(body_lines),
        )

    logger.debug(f"Parsed {len(queries)} queries")
    return QueryModel(queries=queries)
