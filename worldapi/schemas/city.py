"""Schemas for city lookup and insertion."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CityCreate(BaseModel):
    """
    Posted city fields from a form or JSON body. Keys are case-insensitive
    (Name, name and NAME all bind); only an empty name is rejected.
    """

    name: str = Field(..., min_length=1)
    country_code: str = Field(default="", alias="countrycode")
    district: str = ""
    population: int = 0

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def lowercase_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {str(k).lower(): v for k, v in data.items()}
        return data


class CityResponse(BaseModel):
    """One row of the city table."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    country_code: str = Field(serialization_alias="countryCode")
    district: str
    population: int
