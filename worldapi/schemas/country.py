"""Schema for one row of the country table; optional columns serialize as null."""

from pydantic import BaseModel, ConfigDict, Field


class CountryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    continent: str
    region: str
    surface_area: float = Field(serialization_alias="surfacearea")
    indep_year: int | None = Field(default=None, serialization_alias="indepyear")
    population: int
    life_expectancy: float | None = Field(default=None, serialization_alias="lifeexpectancy")
    gnp: float | None = None
    gnp_old: float | None = Field(default=None, serialization_alias="gnpold")
    local_name: str = Field(serialization_alias="localname")
    government_form: str = Field(serialization_alias="governmentform")
    head_of_state: str | None = Field(default=None, serialization_alias="headofstate")
    capital: int | None = None
    code2: str
