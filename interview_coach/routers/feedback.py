from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from interview_coach.auth.auth_util import get_current_user_id
from interview_coach.interview.feedback import FeedbackOrchestrator
from interview_coach.routers.util.dependencies import get_feedback_orchestrator
from interview_coach.schemas.schemas_feedback import Feedback

router = APIRouter(
    prefix="/feedback",
    tags=["feedback"]
)
logger = logging.getLogger(__name__)


@router.post("/generate/{session_id}", response_model=Feedback, status_code=201)
async def generate_feedback(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    orchestrator: FeedbackOrchestrator = Depends(get_feedback_orchestrator),
) -> Feedback:
    """
    Generates and stores the feedback for a completed interview session.
    Only one feedback record can exist per session.
    """
    logger.info(f"Feedback requested for session {session_id} by user {user_id}")
    return await orchestrator.generate_feedback(session_id, user_id)


@router.get("/session/{session_id}", response_model=Feedback)
async def get_feedback_for_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    orchestrator: FeedbackOrchestrator = Depends(get_feedback_orchestrator),
) -> Feedback:
    return await orchestrator.get_feedback_for_session(session_id, user_id)


@router.get("", response_model=List[Feedback])
async def list_feedback(
    user_id: str = Depends(get_current_user_id),
    orchestrator: FeedbackOrchestrator = Depends(get_feedback_orchestrator),
) -> List[Feedback]:
    return await orchestrator.list_feedback_for_user(user_id)


@router.get("/{feedback_id}", response_model=Feedback)
async def get_feedback(
    feedback_id: str,
    user_id: str = Depends(get_current_user_id),
    orchestrator: FeedbackOrchestrator = Depends(get_feedback_orchestrator),
) -> Feedback:
    return await orchestrator.get_feedback(feedback_id, user_id)
