"""Shared schema types: error responses."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    type: str
    title: str
    status: int
    detail: str | dict | list
    instance: str
    code: str | None = None
    errors: list[str] | None = None
