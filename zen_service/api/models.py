from __future__ import annotations

from pydantic import BaseModel


class InfoMessage(BaseModel):
    message: str


class ErrorMessage(BaseModel):
    """Failure body: human-readable message plus a machine-readable kind."""

    message: str
    kind: str
    detail: str
