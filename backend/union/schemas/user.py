"""User Schemas — registration, profile update and public account views.

Invariants:
    - username: 1-32 chars, no '#' or ':' (both are tag/credential separators)
    - password: 1-72 bytes (bcrypt limit)
    - AccountUpdate distinguishes "field omitted" from "field sent as null"
"""

from pydantic import Field, field_validator

from union.core.patches import UNSET, AccountPatch
from union.schemas import CamelModel

PASSWORD_MAX_BYTES = 72


def check_username(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("username cannot be empty or whitespace")
    if "#" in v or ":" in v:
        raise ValueError("username cannot contain '#' or ':'")
    return v


def check_password(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password cannot be longer than {PASSWORD_MAX_BYTES} bytes")
    return v


class RegisterRequest(CamelModel):
    username: str = Field(min_length=1, max_length=32)
    password: str = Field(min_length=1)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return check_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)


class AccountUpdate(CamelModel):
    username: str = Field(min_length=1, max_length=32)
    password: str | None = Field(None, min_length=1)
    avatar_url: str | None = Field(None, max_length=2048)
    admin: bool | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return check_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return check_password(v) if v is not None else v

    def to_patch(self) -> AccountPatch:
        sent = self.model_fields_set
        return AccountPatch(
            username=self.username,
            password=self.password if "password" in sent else UNSET,
            avatar_url=self.avatar_url if "avatar_url" in sent else UNSET,
            admin=self.admin if "admin" in sent else UNSET,
        )


class TagResponse(CamelModel):
    tag: str


class MemberResponse(CamelModel):
    id: str
    username: str
    discriminator: str
    avatar_url: str | None = None
    online: bool = False
    admin: bool | None = None


class AccountResponse(MemberResponse):
    """The caller's own account: public fields plus the membership set."""
    servers: list[int] = []
