from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

DocumentType = Literal["cv", "jobSpec"]
DocumentStatus = Literal["pending", "processed", "error"]


class Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    type: DocumentType
    title: str
    content: str
    status: DocumentStatus = "pending"
    processing_error: Optional[str] = Field(None, alias="processingError")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class DocumentCreate(BaseModel):
    type: DocumentType
    title: constr(strip_whitespace=True, min_length=1, max_length=100)
    content: constr(min_length=1)


class DocumentUpdate(BaseModel):
    title: Optional[constr(strip_whitespace=True, min_length=1, max_length=100)] = None
    content: Optional[constr(min_length=1)] = None


class DocumentAnalysis(BaseModel):
    document: Document
    analysis: str
