"""Credential and request descriptor models."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Credential(BaseModel):
    """Auth token and user id returned by ``login``.

    Opaque to the SDK: the token is never inspected or refreshed.
    """

    auth_token: str
    user_id: str

    model_config = ConfigDict(frozen=True)


class RequestDescriptor(BaseModel):
    """Transport-ready description of one outbound request."""

    method: str
    url: str
    headers: dict[str, str]
    json_body: Any = None
