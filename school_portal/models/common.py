# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared schema building blocks.

Every API schema derives from CamelModel: clients exchange camelCase keys
(``imageCaption``, ``showOnHome``) while Python attributes and database
columns stay snake_case. Both spellings are accepted on input.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model translating snake_case attributes to camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OrderUpdate(CamelModel):
    """New position of one row in a manually ordered list."""

    id: str = Field(..., description="Row identifier")
    order: int = Field(..., ge=0, description="New position")


class MessageResponse(CamelModel):
    """Generic acknowledgement."""

    message: str
    success: bool = True


class PaginatedResponse(CamelModel, Generic[T]):
    """One page of a longer list."""

    items: list[T]
    total: int
    limit: int
    offset: int


MoveDirection = Literal["up", "down"]
