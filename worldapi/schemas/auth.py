"""Request/response schemas for auth endpoints."""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class Credentials(BaseModel):
    """
    Username and password for signup and login.

    Bound from a form or JSON body. Missing fields default to empty so the route
    can answer 400 rather than 422; keys are matched case-insensitively ("Username" and "username" both bind).
    """

    username: str = Field(default="", description="Username")
    password: str = Field(default="", description="Password")

    @model_validator(mode="before")
    @classmethod
    def lowercase_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {str(k).lower(): v for k, v in data.items()}
        return data


class CurrentUser(BaseModel):
    """Authenticated user resolved from the session cookie."""

    username: str


class WhoAmIResponse(BaseModel):
    """Response for GET /whoami."""

    username: str
