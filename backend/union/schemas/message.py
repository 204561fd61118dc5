"""Message and Invite Schemas."""

from datetime import datetime

from pydantic import Field

from union.schemas import CamelModel


class MessageCreate(CamelModel):
    contents: str = Field(min_length=1, max_length=2000)


class MessageUpdate(CamelModel):
    contents: str = Field(min_length=1, max_length=2000)


class MessageResponse(CamelModel):
    id: str
    author: str
    server: int
    contents: str
    created_at: datetime


class InviteResponse(CamelModel):
    code: str
    server_id: int
    inviter: str
