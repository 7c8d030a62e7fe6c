# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative base and shared column mixins for portal tables.

Primary keys are UUID4 strings so that ids travel unchanged between the
database, the JSON API and client-side forms.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from school_portal.utils.datetime import utc_now


def new_id() -> str:
    """Generate a new primary key value."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Declarative base for all portal ORM models."""


class UUIDPrimaryKeyMixin:
    """Adds a UUID string primary key."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class TimestampMixin:
    """Adds a created_at column populated on insert."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )


class UpdatedAtMixin:
    """Adds an updated_at column refreshed on every update."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
    )
