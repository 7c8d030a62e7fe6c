# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Staff directory service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import StaffMember
from school_portal.models.people import StaffMemberSchema
from school_portal.utils.text import is_persisted_id

logger = logging.getLogger(__name__)


class StaffServiceError(Exception):
    """Base exception for staff service errors."""

    pass


class StaffNotFoundError(StaffServiceError):
    """Raised when a staff member is not found."""

    pass


class StaffValidationError(StaffServiceError):
    """Raised when a staff member is invalid."""

    pass


class StaffService:
    """Service for the staff directory."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_staff(self, limit: int | None = None) -> list[StaffMemberSchema]:
        """List staff members by display order."""
        stmt = select(StaffMember).order_by(StaffMember.order_index.asc(), StaffMember.full_name.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._db.execute(stmt)
        return [self._to_response(row) for row in result.scalars().all()]

    async def save_staff_member(self, member: StaffMemberSchema) -> StaffMemberSchema:
        """Create or update a staff member.

        Raises:
            StaffValidationError: If the full name is empty.
            StaffNotFoundError: If updating a member that does not exist.
        """
        full_name = member.full_name.strip()
        if not full_name:
            raise StaffValidationError("Full name is required")

        if is_persisted_id(member.id):
            row = await self._get_by_id(member.id)
        else:
            row = StaffMember()
            self._db.add(row)

        row.full_name = full_name
        row.position = member.position
        row.party_date = member.party_date
        row.email = member.email
        row.avatar_url = member.avatar_url
        row.order_index = member.order

        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Staff member saved: %s", row.id)
        return self._to_response(row)

    async def delete_staff_member(self, member_id: str) -> None:
        """Delete a staff member.

        Raises:
            StaffNotFoundError: If the member does not exist.
        """
        row = await self._get_by_id(member_id)
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Staff member deleted: %s", member_id)

    async def _get_by_id(self, member_id: str) -> StaffMember:
        row = await self._db.get(StaffMember, member_id) if is_persisted_id(member_id) else None
        if row is None:
            raise StaffNotFoundError(f"Staff member {member_id} not found")
        return row

    @staticmethod
    def _to_response(row: StaffMember) -> StaffMemberSchema:
        return StaffMemberSchema(
            id=row.id,
            full_name=row.full_name,
            position=row.position,
            party_date=row.party_date,
            email=row.email,
            avatar_url=row.avatar_url,
            order=row.order_index,
        )
