"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - JSON field names are camelCase (avatarUrl, iconUrl, serverId, createdAt)

Design Decisions:
    - Separate from models and records: schemas are API contracts only
    - Optional fields in update bodies keep their "was it sent?" state through
      model_fields_set, which maps onto core.patches UNSET
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every schema: camelCase aliases, readable from dataclass records."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )
