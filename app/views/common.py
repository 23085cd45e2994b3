"""Schemas shared by several routers."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every non-2xx response raised through ``HTTPException``."""

    detail: str = Field(..., examples=["Song not found"])
