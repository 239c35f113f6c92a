"""Country listing (session required)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from worldapi.api.deps import get_world_store
from worldapi.schemas.country import CountryResponse
from worldapi.services.world import WorldStore

router = APIRouter()


@router.get("/countries", response_model=list[CountryResponse])
def list_countries(
    store: Annotated[WorldStore, Depends(get_world_store)],
) -> list[CountryResponse]:
    """All countries ordered by code; an empty table yields an empty list."""
    return [CountryResponse.model_validate(c) for c in store.list_countries()]
