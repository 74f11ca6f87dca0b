"""Tutorial request/response schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CreateTutorialRequest(BaseModel):
    # title is checked by the service so a missing title is a 400, not a schema error
    title: str | None = None
    description: str | None = None
    published: bool = False


class UpdateTutorialRequest(BaseModel):
    """Every field optional; only the fields sent are applied."""

    title: str | None = None
    description: str | None = None
    published: bool | None = None


class TutorialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str
    published: bool
    created_at: datetime
    updated_at: datetime


class DeletedResponse(BaseModel):
    deleted: int
