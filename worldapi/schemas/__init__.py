"""Pydantic request/response schemas."""

from worldapi.schemas.auth import Credentials, CurrentUser, WhoAmIResponse
from worldapi.schemas.city import CityCreate, CityResponse
from worldapi.schemas.country import CountryResponse
from worldapi.schemas.health import HealthResponse

__all__ = [
    "CityCreate",
    "CityResponse",
    "CountryResponse",
    "Credentials",
    "CurrentUser",
    "HealthResponse",
    "WhoAmIResponse",
]
