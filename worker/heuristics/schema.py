"""
Base model for every heuristic value object.

Python attributes are snake_case; the wire format (crawler JSON, API
payloads) is camelCase. Both spellings validate.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Position(FrozenModel):
    top: float
    left: float


class Size(FrozenModel):
    width: float = Field(ge=0)
    height: float = Field(ge=0)
