"""Live query execution against a running HelixDB instance.

A deployed query is called by POSTing its JSON input to ``/<query_name>``.
Each supported query is described by a QueryHandler in a QueryRegistry: how
to decode the learner's input, which ids from earlier lessons to inject, how
to validate the response, and what counts as a correct result.
"""

import json
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Optional

from httpx import AsyncBaseTransport, AsyncClient, HTTPError, Timeout
from loguru import logger
from pydantic import BaseModel, ValidationError

from helixir.config import HelixirConfig
from helixir.errors import QueryExecutionError
from helixir.progress import Progress


# --- HTTP ---


@asynccontextmanager
async def get_client(
    config: HelixirConfig,
    transport: Optional[AsyncBaseTransport] = None,
) -> AsyncIterator[AsyncClient]:
    """Yield an AsyncClient pointed at the configured HelixDB instance."""
    async with AsyncClient(
        base_url=config.helix_url,
        timeout=Timeout(config.request_timeout),
        transport=transport,
    ) as client:
        yield client


async def call_query(client: AsyncClient, query_name: str, payload: dict[str, Any]) -> Any:
    """POST a query's input and return the decoded JSON response.

    Raises:
        QueryExecutionError: On transport failure, a non-2xx status or a body
            that is not JSON.
    """
    url = f"/{query_name}"
    logger.debug(f"Calling POST '{url}'")

    try:
        response = await client.post(url, json=payload)
    except HTTPError as e:
        logger.error(f"Request failed: POST {url}: {e}")
        raise QueryExecutionError(
            query_name, f"Query failed: {e}. Is your HelixDB instance running?"
        ) from e

    if not response.is_success:
        status_code = response.status_code
        if 400 <= status_code < 500:
            logger.info(f"Client error: POST {url}: {status_code}")
        else:
            logger.error(f"Server error: POST {url}: {status_code}")
        raise QueryExecutionError(
            query_name,
            f"Query failed with status {status_code}: {response.text}. "
            "Check your query name and syntax.",
        )

    try:
        return response.json()
    except ValueError as e:
        raise QueryExecutionError(query_name, f"Query returned invalid JSON: {e}") from e


# --- Registry ---


@dataclass(frozen=True)
class QueryHandler:
    """How to run and judge one named query.

    Attributes:
        name: Query name as deployed.
        input_model: Shape of the JSON input.
        output_model: Shape of the JSON response.
        check: Returns True when the response matches the input.
        inject: Input field -> entity kind; filled with the latest id
            recorded for that kind by an earlier lesson.
        record: Returns (entity kind, entity data) to remember on success.
    """

    name: str
    input_model: type[BaseModel]
    output_model: type[BaseModel]
    check: Callable[[Any, Any], bool]
    inject: dict[str, str] = field(default_factory=dict)
    record: Optional[Callable[[Any, Any], tuple[str, dict[str, Any]]]] = None


class QueryRegistry:
    """Name-keyed QueryHandlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, QueryHandler] = {}

    def register(self, handler: QueryHandler) -> QueryHandler:
        self._handlers[handler.name] = handler
        return handler

    def get(self, name: str) -> Optional[QueryHandler]:
        return self._handlers.get(name)

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers


# --- Execution ---


@dataclass(frozen=True)
class ExecutionOutcome:
    passed: bool
    message: str
    result: Any = None


def _prepare_input(
    handler: QueryHandler,
    progress: Progress,
    payload: dict[str, Any],
) -> BaseModel:
    values = dict(payload)
    for field_name, kind in handler.inject.items():
        entity_id = progress.latest_entity_id(kind)
        if entity_id is None:
            raise QueryExecutionError(
                handler.name,
                f"No {kind} found. Complete the lesson that creates one first.",
            )
        values[field_name] = entity_id

    try:
        return handler.input_model.model_validate(values)
    except ValidationError as e:
        raise QueryExecutionError(handler.name, f"Invalid input for {handler.name}: {e}") from e


async def execute_and_compare(
    client: AsyncClient,
    registry: QueryRegistry,
    progress: Progress,
    query_name: str,
    payload: dict[str, Any],
) -> ExecutionOutcome:
    """Run a registered query and judge its result.

    Args:
        client: HTTP client for the HelixDB instance.
        registry: Known queries.
        progress: Source of ids from earlier lessons, and where new ones go.
        query_name: Query to run.
        payload: JSON input supplied by the lesson.

    Returns:
        ExecutionOutcome with pass/fail, a readable message and the raw result.

    Raises:
        QueryExecutionError: If the query is unknown, a prerequisite id is
            missing, the input is invalid, or the call or response fails.
    """
    handler = registry.get(query_name)
    if handler is None:
        raise QueryExecutionError(query_name, f"Unknown query: {query_name}")

    query_input = _prepare_input(handler, progress, payload)
    raw = await call_query(client, query_name, query_input.model_dump(mode="json"))

    try:
        query_output = handler.output_model.model_validate(raw)
    except ValidationError as e:
        raise QueryExecutionError(
            query_name,
            f"Response from {query_name} does not have the expected shape: {e}",
        ) from e

    pretty = json.dumps(raw, indent=2)
    if not handler.check(query_input, query_output):
        logger.info(f"Query {query_name} returned a mismatching result")
        return ExecutionOutcome(
            passed=False,
            message=(
                "Query executed but the result doesn't match the input.\n"
                f"Database result:\n{pretty}"
            ),
            result=raw,
        )

    message = f"{query_name} succeeded!\nDatabase result:\n{pretty}"
    if handler.record is not None:
        kind, entity = handler.record(query_input, query_output)
        progress.save_created_entity(kind, entity)
        message += f"\nSaved {kind} id for future lessons."

    return ExecutionOutcome(passed=True, message=message, result=raw)
