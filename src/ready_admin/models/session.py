"""
Session models: the records listed and edited by the directory view.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SessionStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class UserRef(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    name: str = ""
    email: str = ""

    # The backend sends null for unset text; read it as empty.
    @field_validator("id", "name", "email", mode="before")
    @classmethod
    def blank_if_null(cls, value: Any) -> Any:
        return "" if value is None else value


class ListenerRef(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(default="", alias="_id")
    name: str = ""
    description: str = ""

    @field_validator("id", "name", "description", mode="before")
    @classmethod
    def blank_if_null(cls, value: Any) -> Any:
        return "" if value is None else value


class SessionRecord(BaseModel):
    """One scheduled pairing between a user and a listener."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id", min_length=1)
    user: Optional[UserRef] = None
    listener: Optional[ListenerRef] = None
    topic: str = ""
    time: Optional[datetime] = None
    meeting_link: Optional[str] = Field(default=None, alias="meetingLink")
    status: SessionStatus
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("topic", mode="before")
    @classmethod
    def blank_if_null(cls, value: Any) -> Any:
        return "" if value is None else value

    def with_meeting_link(self, link: str) -> SessionRecord:
        return self.model_copy(update={"meeting_link": link})


class SessionPage(BaseModel):
    """GET /sessions/platform/all result. Raw candidates, validated by the caller."""

    records: list[Any]
    total: Optional[int] = None
