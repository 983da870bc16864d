"""Input/output shapes for the tutorial's data-creating queries."""

from pydantic import BaseModel, ConfigDict

from helixir.executor import QueryHandler, QueryRegistry


class _Response(BaseModel):
    model_config = ConfigDict(extra="allow")


# --- Continent ---


class CreateContinentInput(BaseModel):
    name: str


class ContinentData(_Response):
    id: str
    name: str


class CreateContinentResult(_Response):
    continent: ContinentData


# --- Country ---


class CreateCountryInput(BaseModel):
    continent_id: str
    name: str
    currency: str
    population: int
    gdp: float


class CountryData(_Response):
    id: str
    name: str
    currency: str
    population: int
    gdp: float


class CreateCountryResult(_Response):
    country: CountryData


# --- City ---


class CreateCityInput(BaseModel):
    country_id: str
    name: str
    description: str


class CityData(_Response):
    id: str
    name: str
    description: str


class CreateCityResult(_Response):
    city: CityData


# --- Capital ---


class SetCapitalInput(BaseModel):
    country_id: str
    city_id: str


class CapitalEdge(_Response):
    from_node: str
    to_node: str


class SetCapitalResult(_Response):
    country_capital: CapitalEdge


# --- Handlers ---


def _country_matches(i: CreateCountryInput, o: CreateCountryResult) -> bool:
    return (
        o.country.name == i.name
        and o.country.currency == i.currency
        and o.country.population == i.population
        and o.country.gdp == i.gdp
    )


def default_registry() -> QueryRegistry:
    """Registry with every query the tutorial runs live."""
    registry = QueryRegistry()

    registry.register(
        QueryHandler(
            name="createContinent",
            input_model=CreateContinentInput,
            output_model=CreateContinentResult,
            check=lambda i, o: o.continent.name == i.name,
            record=lambda i, o: ("continents", {"id": o.continent.id, "name": o.continent.name}),
        )
    )
    registry.register(
        QueryHandler(
            name="createCountry",
            input_model=CreateCountryInput,
            output_model=CreateCountryResult,
            check=_country_matches,
            inject={"continent_id": "continents"},
            record=lambda i, o: (
                "countries",
                {**o.country.model_dump(), "continent_id": i.continent_id},
            ),
        )
    )
    registry.register(
        QueryHandler(
            name="createCity",
            input_model=CreateCityInput,
            output_model=CreateCityResult,
            check=lambda i, o: o.city.name == i.name and o.city.description == i.description,
            inject={"country_id": "countries"},
            record=lambda i, o: ("cities", {**o.city.model_dump(), "country_id": i.country_id}),
        )
    )
    registry.register(
        QueryHandler(
            name="setCapital",
            input_model=SetCapitalInput,
            output_model=SetCapitalResult,
            check=lambda i, o: (
                o.country_capital.from_node == i.country_id
                and o.country_capital.to_node == i.city_id
            ),
            inject={"country_id": "countries", "city_id": "cities"},
        )
    )

    return registry
