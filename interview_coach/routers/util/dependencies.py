from __future__ import annotations

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from interview_coach.config import get_feedback_concurrency, get_llm_settings
from interview_coach.data import DocumentStore, FeedbackStore, SessionStore
from interview_coach.db import get_db
from interview_coach.documents.document_service import DocumentService
from interview_coach.interview.feedback import (
    FeedbackOrchestrator,
    OverallFeedbackAggregator,
    QuestionFeedbackGenerator,
)
from interview_coach.interview.questioning.question_generator import QuestionGenerator
from interview_coach.interview.session import InterviewService
from interview_coach.llm.client import LlmClient, build_llm_client

logger = logging.getLogger(__name__)


def get_llm_client(request: Request) -> LlmClient:
    """The LLM collaborator built at startup; built lazily if startup was skipped."""
    client = getattr(request.app.state, "llm_client", None)
    if client is None:
        client = build_llm_client(get_llm_settings())
        request.app.state.llm_client = client
    return client


def get_question_generator(
    db: AsyncSession = Depends(get_db),
    llm: LlmClient = Depends(get_llm_client),
) -> QuestionGenerator:
    return QuestionGenerator(DocumentStore(db), llm)


def get_interview_service(
    db: AsyncSession = Depends(get_db),
    question_generator: QuestionGenerator = Depends(get_question_generator),
) -> InterviewService:
    return InterviewService(SessionStore(db), question_generator)


def get_document_service(
    db: AsyncSession = Depends(get_db),
    llm: LlmClient = Depends(get_llm_client),
) -> DocumentService:
    return DocumentService(DocumentStore(db), llm)


def get_feedback_orchestrator(
    db: AsyncSession = Depends(get_db),
    llm: LlmClient = Depends(get_llm_client),
) -> FeedbackOrchestrator:
    return FeedbackOrchestrator(
        session_store=SessionStore(db),
        feedback_store=FeedbackStore(db),
        question_feedback=QuestionFeedbackGenerator(llm),
        aggregator=OverallFeedbackAggregator(llm),
        concurrency=get_feedback_concurrency(),
    )
