"""
Persistence for uploaded CVs and job specifications.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from interview_coach.db.models_document import Document as DocumentRow
from interview_coach.errors import ConflictError, NotFoundError
from interview_coach.schemas.schemas_document import Document

logger = logging.getLogger(__name__)

DOCUMENT_LABELS = {"cv": "CV", "jobSpec": "job specification"}


class DocumentStore:

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _to_record(row: DocumentRow) -> Document:
        return Document(
            id=row.id,
            user_id=row.user_id,
            type=row.type,
            title=row.title,
            content=row.content,
            status=row.status,
            processing_error=row.processing_error,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def find_by_user_and_type(self, user_id: str, doc_type: str) -> Optional[Document]:
        row = await self.db.scalar(
            select(DocumentRow).where(
                DocumentRow.user_id == user_id,
                DocumentRow.type == doc_type,
            )
        )
        return self._to_record(row) if row else None

    async def find_by_id(self, document_id: str) -> Optional[Document]:
        row = await self.db.get(DocumentRow, document_id)
        return self._to_record(row) if row else None

    async def list_for_user(self, user_id: str) -> List[Document]:
        res = await self.db.execute(
            select(DocumentRow)
            .where(DocumentRow.user_id == user_id)
            .order_by(DocumentRow.created_at.desc())
        )
        return [self._to_record(row) for row in res.scalars().all()]

    async def create(self, user_id: str, doc_type: str, title: str, content: str) -> Document:
        row = DocumentRow(user_id=user_id, type=doc_type, title=title, content=content, status="pending")
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            if await self.find_by_user_and_type(user_id, doc_type) is not None:
                raise ConflictError(
                    f"You already have a {DOCUMENT_LABELS[doc_type]} uploaded. "
                    "Please update or delete it first."
                )
            raise
        await self.db.refresh(row)
        logger.info(f"Stored {doc_type} document {row.id} for user {user_id}")
        return self._to_record(row)

    async def update(self, document: Document) -> Document:
        row = await self.db.get(DocumentRow, document.id)
        if row is None:
            raise NotFoundError("Document not found")
        row.title = document.title
        row.content = document.content
        row.status = document.status
        row.processing_error = document.processing_error
        await self.db.commit()
        await self.db.refresh(row)
        return self._to_record(row)

    async def delete(self, document_id: str) -> None:
        row = await self.db.get(DocumentRow, document_id)
        if row is None:
            raise NotFoundError("Document not found")
        await self.db.delete(row)
        await self.db.commit()
