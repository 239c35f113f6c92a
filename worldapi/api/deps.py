"""Dependency providers wiring per-request DB sessions into the stores."""

from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from worldapi.core.config import Settings
from worldapi.core.database import get_db
from worldapi.schemas.auth import Credentials
from worldapi.schemas.city import CityCreate
from worldapi.services.sessions import SessionGate
from worldapi.services.users import UserStore
from worldapi.services.world import WorldStore


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_world_store(db: Annotated[Session, Depends(get_db)]) -> WorldStore:
    return WorldStore(db)


def get_session_gate(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SessionGate:
    return SessionGate(db, settings)


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _read_body(request: Request) -> Any:
    """Posted fields from a form or a JSON body, chosen by Content-Type."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)
    try:
        return await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "Body is not valid JSON"}]
        )


async def credentials_body(request: Request) -> Credentials:
    """Dependency: bind username/password from form or JSON. Invalid bodies surface as 400."""
    try:
        return Credentials.model_validate(await _read_body(request))
    except ValidationError as e:
        raise RequestValidationError(e.errors())


async def city_body(request: Request) -> CityCreate:
    """Dependency: bind posted city fields from form or JSON. Invalid bodies surface as 400."""
    try:
        return CityCreate.model_validate(await _read_body(request))
    except ValidationError as e:
        raise RequestValidationError(e.errors())
