"""City lookup by name and city insertion (session required)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from worldapi.api.deps import city_body, get_world_store
from worldapi.schemas.city import CityCreate, CityResponse
from worldapi.services.world import WorldStore

router = APIRouter()


@router.get("/cities/{name}", response_model=CityResponse)
def get_city(
    name: str,
    store: Annotated[WorldStore, Depends(get_world_store)],
) -> CityResponse:
    """Return the city whose name matches exactly; 404 if there is none."""
    city = store.get_city_by_name(name)
    if city is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="City not found.")
    return CityResponse.model_validate(city)


@router.post("/cities", response_model=CityResponse)
@router.post("/post", response_model=CityResponse, include_in_schema=False)
def add_city(
    body: Annotated[CityCreate, Depends(city_body)],
    store: Annotated[WorldStore, Depends(get_world_store)],
) -> CityResponse:
    """Insert a city and echo the stored row, including its new id."""
    return CityResponse.model_validate(store.add_city(body))
