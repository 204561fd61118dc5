"""Server Schemas — create/update bodies and the expanded server view."""

from pydantic import Field, field_validator

from union.core.patches import UNSET, ServerPatch
from union.schemas import CamelModel
from union.schemas.user import MemberResponse


class ServerCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    icon_url: str | None = Field(None, max_length=2048)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ServerUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    icon_url: str | None = Field(None, max_length=2048)

    def to_patch(self) -> ServerPatch:
        sent = self.model_fields_set
        return ServerPatch(
            name=self.name if "name" in sent else UNSET,
            icon_url=self.icon_url if "icon_url" in sent else UNSET,
        )


class ServerResponse(CamelModel):
    id: int
    name: str
    owner: str
    icon_url: str | None = None
    members: list[MemberResponse] = []
