from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from interview_coach.auth.auth_util import get_current_user_id
from interview_coach.interview.questioning.question_generator import QuestionGenerator
from interview_coach.interview.session import InterviewService
from interview_coach.routers.util.dependencies import get_interview_service, get_question_generator
from interview_coach.schemas.schemas_interview import (
    QuestionGenerationRequest,
    QuestionList,
    ResponseCreate,
    Session,
    SessionCreate,
)

router = APIRouter(
    prefix="/interviews",
    tags=["interviews"]
)
logger = logging.getLogger(__name__)


@router.post("/questions/generate", response_model=QuestionList)
async def generate_questions(
    payload: QuestionGenerationRequest,
    user_id: str = Depends(get_current_user_id),
    generator: QuestionGenerator = Depends(get_question_generator),
) -> QuestionList:
    questions = await generator.generate_questions(
        user_id,
        count=payload.count,
        difficulty=payload.difficulty,
        categories=payload.categories,
    )
    return QuestionList(count=len(questions), data=questions)


@router.post("/sessions", response_model=Session, status_code=201)
async def create_session(
    payload: SessionCreate,
    user_id: str = Depends(get_current_user_id),
    service: InterviewService = Depends(get_interview_service),
) -> Session:
    return await service.create_session(user_id, title=payload.title, questions=payload.questions)


@router.get("/sessions", response_model=List[Session])
async def list_sessions(
    user_id: str = Depends(get_current_user_id),
    service: InterviewService = Depends(get_interview_service),
) -> List[Session]:
    return await service.list_sessions(user_id)


@router.get("/sessions/{session_id}", response_model=Session)
async def get_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InterviewService = Depends(get_interview_service),
) -> Session:
    return await service.get_session(session_id, user_id)


@router.post("/sessions/{session_id}/responses", response_model=Session)
async def save_response(
    session_id: str,
    payload: ResponseCreate,
    user_id: str = Depends(get_current_user_id),
    service: InterviewService = Depends(get_interview_service),
) -> Session:
    return await service.save_response(
        session_id,
        user_id,
        question_id=payload.question_id,
        transcription=payload.transcription,
        duration=payload.duration,
        audio_reference=payload.audio_reference,
    )


@router.put("/sessions/{session_id}/end", response_model=Session)
async def end_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InterviewService = Depends(get_interview_service),
) -> Session:
    return await service.end_session(session_id, user_id)
