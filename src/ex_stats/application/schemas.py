"""Pydantic schemas for ex_stats API responses."""

from pydantic import BaseModel


class VersionResponse(BaseModel):
    ver: str | None
