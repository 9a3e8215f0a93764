"""
CV / job specification management and on-demand LLM analysis of a document.
"""
import logging
from typing import List, Optional

from interview_coach.data.document_store import DOCUMENT_LABELS
from interview_coach.data.interfaces import DocumentRepository
from interview_coach.errors import ExternalServiceDegradedError, ForbiddenError, NotFoundError
from interview_coach.llm.client import LlmClient
from interview_coach.llm.template_store import render_system_prompt, render_template
from interview_coach.schemas.schemas_document import Document, DocumentAnalysis

logger = logging.getLogger(__name__)

MAX_ERROR_LENGTH = 500


class DocumentService:

    ANALYSIS_TEMPLATE = "document_analysis"
    MAX_TOKENS = 1000
    TEMPERATURE = 0.5

    def __init__(self, document_store: DocumentRepository, llm: LlmClient):
        self.documents = document_store
        self.llm = llm

    async def upload(self, user_id: str, doc_type: str, title: str, content: str) -> Document:
        """Stores a new document. Each user has at most one document per type."""
        return await self.documents.create(user_id, doc_type, title, content)

    async def list_documents(self, user_id: str) -> List[Document]:
        return await self.documents.list_for_user(user_id)

    async def get_document(self, document_id: str, user_id: str) -> Document:
        document = await self.documents.find_by_id(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        if document.user_id != user_id:
            raise ForbiddenError("Not authorized to access this document")
        return document

    async def update_document(self,
                              document_id: str,
                              user_id: str,
                              title: Optional[str] = None,
                              content: Optional[str] = None) -> Document:
        document = await self.get_document(document_id, user_id)

        if title is not None:
            document.title = title
        if content is not None and content != document.content:
            # changed content invalidates an earlier analysis
            document.content = content
            document.status = "pending"
            document.processing_error = None

        return await self.documents.update(document)

    async def delete_document(self, document_id: str, user_id: str) -> None:
        await self.get_document(document_id, user_id)
        await self.documents.delete(document_id)
        logger.info(f"Deleted document {document_id} of user {user_id}")

    async def process_document(self, document_id: str, user_id: str) -> DocumentAnalysis:
        """
        Runs one LLM analysis of the document and records the outcome on it.

        Raises:
            ExternalServiceDegradedError: If the LLM call fails. The document is
                left with status ``error`` and the failure message.
        """
        document = await self.get_document(document_id, user_id)
        label = DOCUMENT_LABELS[document.type]

        try:
            analysis = await self.llm.complete(
                render_system_prompt(self.ANALYSIS_TEMPLATE, document_label_plural=f"{label}s"),
                render_template(self.ANALYSIS_TEMPLATE, document_label=label, content=document.content),
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
            )
        except Exception as e:
            logger.error(f"Document analysis failed for {document_id}: {e}")
            document.status = "error"
            document.processing_error = str(e)[:MAX_ERROR_LENGTH] or type(e).__name__
            await self.documents.update(document)
            raise ExternalServiceDegradedError("Error processing document") from e

        document.status = "processed"
        document.processing_error = None
        updated = await self.documents.update(document)
        logger.info(f"Processed {document.type} document {document_id}")
        return DocumentAnalysis(document=updated, analysis=analysis)
