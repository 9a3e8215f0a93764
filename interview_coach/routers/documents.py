from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from interview_coach.auth.auth_util import get_current_user_id
from interview_coach.documents.document_service import DocumentService
from interview_coach.routers.util.dependencies import get_document_service
from interview_coach.schemas.schemas_document import (
    Document,
    DocumentAnalysis,
    DocumentCreate,
    DocumentUpdate,
)

router = APIRouter(
    prefix="/documents",
    tags=["documents"]
)
logger = logging.getLogger(__name__)


@router.post("", response_model=Document, status_code=201)
async def upload_document(
    payload: DocumentCreate,
    user_id: str = Depends(get_current_user_id),
    service: DocumentService = Depends(get_document_service),
) -> Document:
    return await service.upload(user_id, payload.type, payload.title, payload.content)


@router.get("", response_model=List[Document])
async def list_documents(
    user_id: str = Depends(get_current_user_id),
    service: DocumentService = Depends(get_document_service),
) -> List[Document]:
    return await service.list_documents(user_id)


@router.get("/{document_id}", response_model=Document)
async def get_document(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    service: DocumentService = Depends(get_document_service),
) -> Document:
    return await service.get_document(document_id, user_id)


@router.put("/{document_id}", response_model=Document)
async def update_document(
    document_id: str,
    payload: DocumentUpdate,
    user_id: str = Depends(get_current_user_id),
    service: DocumentService = Depends(get_document_service),
) -> Document:
    return await service.update_document(document_id, user_id, title=payload.title, content=payload.content)


@router.delete("/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    service: DocumentService = Depends(get_document_service),
):
    await service.delete_document(document_id, user_id)
    return None


@router.post("/{document_id}/process", response_model=DocumentAnalysis)
async def process_document(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    service: DocumentService = Depends(get_document_service),
) -> DocumentAnalysis:
    return await service.process_document(document_id, user_id)
