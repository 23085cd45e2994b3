"""Schemas for lesson documents."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentResponse(BaseModel):
    """Uploaded document as exposed to the front end."""

    id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    content: str
    uploaded_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
