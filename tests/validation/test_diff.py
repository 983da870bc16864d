"""Tests for helixir.validation.diff -- schema and query answer diffs."""

from helixir.validation.diff import (
    EdgeErrors,
    PropertyErrors,
    diff_properties,
    diff_queries,
    diff_schema,
    normalize_query_body,
)
from helixir.validation.models import (
    EdgeDef,
    NodeDef,
    Property,
    QueryModel,
    QuerySignature,
    SchemaModel,
    VectorDef,
)
from helixir.validation.parser import parse_queries, parse_schema


# --- Helpers ---


def _props(**types: str) -> list[Property]:
    return [Property(name, declared_type) for name, declared_type in types.items()]


def _schema(
    nodes: dict[str, dict[str, str]] | None = None,
    edges: dict[str, tuple[str, str, dict[str, str]]] | None = None,
    vectors: dict[str, dict[str, str]] | None = None,
) -> SchemaModel:
    return SchemaModel(
        nodes={n: NodeDef(n, _props(**p)) for n, p in (nodes or {}).items()},
        edges={
            e: EdgeDef(e, from_type=f, to_type=t, properties=_props(**p))
            for e, (f, t, p) in (edges or {}).items()
        },
        vectors={v: VectorDef(v, _props(**p)) for v, p in (vectors or {}).items()},
    )


def _queries(*signatures: tuple[str, str, str]) -> QueryModel:
    return QueryModel(
        queries={name: QuerySignature(name, params, body) for name, params, body in signatures}
    )


FULL_SCHEMA = _schema(
    nodes={
        "Continent": {"name": "String"},
        "Country": {"name": "String", "currency": "String", "population": "U64", "gdp": "F64"},
    },
    edges={
        "Continent_to_Country": ("Continent", "Country", {}),
        "Country_to_Capital": ("Country", "City", {"since": "Date"}),
    },
    vectors={"CityDescription": {"vector": "[F64]"}},
)


# --- diff_properties ---


class TestDiffProperties:
    def test_identical(self):
        errors = diff_properties(_props(a="String"), _props(a="String"))
        assert errors == PropertyErrors()
        assert errors.is_empty

    def test_missing_and_extra(self):
        errors = diff_properties(_props(a="String", x="I64"), _props(a="String", b="F64"))
        assert errors.missing == ["b"]
        assert errors.extra == ["x"]
        assert errors.wrong_type == []

    def test_wrong_type_reported_once(self):
        errors = diff_properties(_props(name="Str"), _props(name="String"))
        assert errors.wrong_type == [("name", "String", "Str")]
        assert errors.missing == []
        assert errors.extra == []

    def test_lists_are_sorted(self):
        errors = diff_properties([], _props(c="A", a="A", b="A"))
        assert errors.missing == ["a", "b", "c"]


# --- diff_schema: identical and scenario checks ---


class TestDiffSchemaIdentical:
    def test_same_model_is_correct(self):
        report = diff_schema(FULL_SCHEMA, FULL_SCHEMA)
        assert report.is_correct is True
        assert report.missing_nodes == []
        assert report.extra_nodes == []
        assert report.node_errors == {}
        assert report.missing_edges == []
        assert report.extra_edges == []
        assert report.edge_errors == {}
        assert report.missing_vectors == []
        assert report.extra_vectors == []
        assert report.vector_errors == {}

    def test_empty_models(self):
        assert diff_schema(SchemaModel(), SchemaModel()).is_correct is True

    def test_single_node_match(self):
        user = parse_schema("N::Continent {\n  name: String\n}\n")
        expected = parse_schema("N::Continent {\n  name: String\n}\n")
        report = diff_schema(user, expected)
        assert report.is_correct is True
        assert report.node_errors == {}


class TestDiffSchemaNodes:
    def test_node_property_wrong_type(self):
        user = parse_schema("N::Continent {\n  name: Str\n}\n")
        expected = parse_schema("N::Continent {\n  name: String\n}\n")
        report = diff_schema(user, expected)

        assert report.is_correct is False
        errors = report.node_errors["Continent"]
        assert errors.wrong_type == [("name", "String", "Str")]
        assert errors.missing == []
        assert errors.extra == []

    def test_node_trailing_comma_is_a_type_difference(self):
        user = parse_schema("N::Continent {\n  name: String,\n}\n")
        expected = parse_schema("N::Continent {\n  name: String\n}\n")
        report = diff_schema(user, expected)

        assert report.is_correct is False
        assert report.node_errors["Continent"].wrong_type == [("name", "String", "String,")]

    def test_missing_node_fails(self):
        report = diff_schema(_schema(nodes={"A": {}}), _schema(nodes={"A": {}, "B": {}}))
        assert report.is_correct is False
        assert report.missing_nodes == ["B"]

    def test_extra_node_does_not_fail(self):
        report = diff_schema(_schema(nodes={"A": {}, "Z": {}}), _schema(nodes={"A": {}}))
        assert report.is_correct is True
        assert report.extra_nodes == ["Z"]

    def test_extra_property_fails(self):
        report = diff_schema(
            _schema(nodes={"A": {"x": "I64", "y": "I64"}}),
            _schema(nodes={"A": {"x": "I64"}}),
        )
        assert report.is_correct is False
        assert report.node_errors["A"].extra == ["y"]

    def test_disjoint_names(self):
        report = diff_schema(
            _schema(nodes={"A": {}, "B": {}}),
            _schema(nodes={"C": {}, "D": {}}),
        )
        assert report.missing_nodes == ["C", "D"]
        assert report.extra_nodes == ["A", "B"]
        assert report.node_errors == {}


class TestDiffSchemaEdges:
    def test_missing_edge_has_no_error_entry(self):
        report = diff_schema(_schema(), _schema(edges={"A": ("X", "Y", {})}))
        assert report.missing_edges == ["A"]
        assert report.edge_errors == {}
        assert report.is_correct is False

    def test_to_type_mismatch(self):
        user = parse_schema("E::Country_to_Capital {\n  From: Country,\n  To: Country,\n}\n")
        expected = parse_schema("E::Country_to_Capital {\n  From: Country,\n  To: City,\n}\n")
        report = diff_schema(user, expected)

        errors = report.edge_errors["Country_to_Capital"]
        assert errors.to_type_mismatch == ("Country", "City")
        assert errors.from_type_mismatch is None
        assert report.is_correct is False

    def test_from_type_mismatch(self):
        report = diff_schema(
            _schema(edges={"E": ("B", "C", {})}),
            _schema(edges={"E": ("A", "C", {})}),
        )
        assert report.edge_errors["E"] == EdgeErrors(from_type_mismatch=("B", "A"))

    def test_edge_property_wrong_type(self):
        report = diff_schema(
            _schema(edges={"E": ("A", "B", {"since": "String"})}),
            _schema(edges={"E": ("A", "B", {"since": "Date"})}),
        )
        errors = report.edge_errors["E"]
        assert errors.from_type_mismatch is None
        assert errors.to_type_mismatch is None
        assert errors.property_errors.wrong_type == [("since", "Date", "String")]
        assert errors.property_errors.missing == []
        assert errors.property_errors.extra == []

    def test_extra_edge_does_not_fail(self):
        report = diff_schema(_schema(edges={"E": ("A", "B", {})}), _schema())
        assert report.is_correct is True
        assert report.extra_edges == ["E"]


class TestDiffSchemaVectors:
    def test_vector_property_missing(self):
        report = diff_schema(
            _schema(vectors={"V": {}}),
            _schema(vectors={"V": {"vector": "[F64]"}}),
        )
        assert report.is_correct is False
        assert report.vector_errors["V"].missing == ["vector"]

    def test_missing_vector(self):
        report = diff_schema(_schema(), _schema(vectors={"V": {}}))
        assert report.missing_vectors == ["V"]
        assert report.vector_errors == {}

    def test_node_named_like_vector_is_not_a_vector(self):
        report = diff_schema(_schema(nodes={"Doc": {}}), _schema(vectors={"Doc": {}}))
        assert report.missing_vectors == ["Doc"]
        assert report.extra_nodes == ["Doc"]


# --- normalize_query_body ---


class TestNormalizeQueryBody:
    def test_collapses_lines(self):
        assert normalize_query_body("  a <- N\n\n   RETURN a  \n") == "a <- N RETURN a"

    def test_inner_spacing_kept(self):
        assert normalize_query_body("a  <-  N") == "a  <-  N"

    def test_empty(self):
        assert normalize_query_body("") == ""


# --- diff_queries ---


CREATE_CITY = (
    "QUERY createCity(country_id: ID, name: String) =>\n"
    "    city <- AddN<City>({name: name})\n"
    "    country <- N<Country>(country_id)\n"
    "    AddE<Country_to_City>::From(country)::To(city)\n"
    "    RETURN city\n"
)


class TestDiffQueries:
    def test_identical(self):
        model = parse_queries(CREATE_CITY)
        report = diff_queries(model, model)
        assert report.is_correct is True
        assert report.missing_queries == []
        assert report.query_errors == {}

    def test_blank_line_in_body_accepted(self):
        user = parse_queries(CREATE_CITY.replace("    RETURN city\n", "\n    RETURN city\n"))
        report = diff_queries(user, parse_queries(CREATE_CITY))
        assert report.is_correct is True

    def test_missing_query(self):
        report = diff_queries(_queries(), _queries(("f", "", "RETURN 1")))
        assert report.is_correct is False
        assert report.missing_queries == ["f"]
        assert report.query_errors == {}

    def test_extra_query_ignored(self):
        report = diff_queries(_queries(("f", "", "RETURN 1")), _queries())
        assert report.is_correct is True

    def test_parameter_mismatch(self):
        report = diff_queries(
            _queries(("f", "id: ID", "RETURN 1")),
            _queries(("f", "id: String", "RETURN 1")),
        )
        assert report.is_correct is False
        assert report.query_errors["f"] == (
            "Parameters mismatch. Expected: (id: String), Got: (id: ID)"
        )

    def test_parameters_are_whitespace_sensitive(self):
        report = diff_queries(
            _queries(("f", "id:ID", "RETURN 1")),
            _queries(("f", "id: ID", "RETURN 1")),
        )
        assert "f" in report.query_errors

    def test_body_mismatch(self):
        report = diff_queries(
            _queries(("f", "", "RETURN 2")),
            _queries(("f", "", "RETURN 1")),
        )
        assert report.query_errors["f"] == "Query body differs from expected implementation"

    def test_both_mismatches_joined(self):
        report = diff_queries(
            _queries(("f", "a: I64", "RETURN 2")),
            _queries(("f", "b: I64", "RETURN 1")),
        )
        assert report.query_errors["f"] == (
            "Parameters mismatch. Expected: (b: I64), Got: (a: I64). "
            "Query body differs from expected implementation"
        )

    def test_reordered_clauses_differ(self):
        report = diff_queries(
            _queries(("f", "", "b <- N\na <- N")),
            _queries(("f", "", "a <- N\nb <- N")),
        )
        assert report.is_correct is False
