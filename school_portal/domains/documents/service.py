# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Official documents and downloadable resources."""

import logging

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_portal.infrastructure.database.models import Document
from school_portal.models.content import DocumentSchema
from school_portal.utils.datetime import parse_issue_date
from school_portal.utils.text import is_persisted_id

logger = logging.getLogger(__name__)


def latest_documents_query(limit: int) -> Select:
    """Documents by issue date, newest first.

    Documents without a parseable issue date come last, newest upload first.
    """
    return (
        select(Document)
        .order_by(Document.issued_on.desc().nulls_last(), Document.created_at.desc())
        .limit(limit)
    )


class DocumentServiceError(Exception):
    """Base exception for document service errors."""

    pass


class DocumentNotFoundError(DocumentServiceError):
    """Raised when a document is not found."""

    pass


class DocumentValidationError(DocumentServiceError):
    """Raised when a document is invalid."""

    pass


class DocumentService:
    """Service for the document library."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_documents(
        self,
        category_id: str | None = None,
        limit: int | None = None,
    ) -> list[DocumentSchema]:
        """List documents, newest first.

        Args:
            category_id: Only documents of this category.
            limit: Maximum number of documents.
        """
        stmt = select(Document)
        if category_id:
            stmt = stmt.where(Document.category_id == category_id)
        stmt = stmt.order_by(Document.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self._db.execute(stmt)
        return [self._to_response(row) for row in result.scalars().all()]

    async def list_latest(self, limit: int) -> list[DocumentSchema]:
        """Latest documents by issue date, used by document blocks."""
        result = await self._db.execute(latest_documents_query(limit))
        return [self._to_response(row) for row in result.scalars().all()]

    async def save_document(self, document: DocumentSchema) -> DocumentSchema:
        """Create or update a document.

        Raises:
            DocumentValidationError: If the title is empty.
            DocumentNotFoundError: If updating a document that does not exist.
        """
        title = document.title.strip()
        if not title:
            raise DocumentValidationError("Title is required")

        if is_persisted_id(document.id):
            row = await self._get_by_id(document.id)
        else:
            row = Document()
            self._db.add(row)

        row.number = document.number
        row.title = title
        row.date = document.date
        row.issued_on = parse_issue_date(document.date)
        row.category_id = document.category_id or None
        row.download_url = document.download_url

        await self._db.commit()
        await self._db.refresh(row)

        logger.info("Document saved: %s", row.id)
        return self._to_response(row)

    async def delete_document(self, document_id: str) -> None:
        """Delete a document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        row = await self._get_by_id(document_id)
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Document deleted: %s", document_id)

    async def _get_by_id(self, document_id: str) -> Document:
        row = await self._db.get(Document, document_id) if is_persisted_id(document_id) else None
        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return row

    @staticmethod
    def _to_response(row: Document) -> DocumentSchema:
        return DocumentSchema(
            id=row.id,
            number=row.number,
            title=row.title,
            date=row.date,
            issued_on=row.issued_on,
            category_id=row.category_id,
            download_url=row.download_url,
            created_at=row.created_at,
        )
