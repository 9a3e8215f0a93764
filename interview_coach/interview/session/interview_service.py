"""
Session lifecycle for interview practice: creating sessions, recording answers
and closing them so feedback can be generated.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from interview_coach.data.interfaces import SessionRepository
from interview_coach.errors import ForbiddenError, InvalidStateError, NotFoundError
from interview_coach.interview.questioning.question_generator import QuestionGenerator
from interview_coach.schemas.schemas_interview import (
    SESSION_COMPLETED,
    SESSION_IN_PROGRESS,
    Question,
    QuestionIn,
    Response,
    Session,
    new_id,
)

logger = logging.getLogger(__name__)


class InterviewService:
    """
    Owns the in-progress → completed state machine of interview sessions.
    Sessions are only ever modified by their owner.
    """

    def __init__(self, session_store: SessionRepository, question_generator: QuestionGenerator):
        self.sessions = session_store
        self.question_generator = question_generator

    @staticmethod
    def default_title(now: datetime) -> str:
        return f"Interview Session - {now.strftime('%Y-%m-%d')}"

    async def create_session(self,
                             user_id: str,
                             title: Optional[str] = None,
                             questions: Optional[Sequence[QuestionIn]] = None) -> Session:
        """
        Starts a new session. Without explicit questions a fresh set is generated
        from the user's documents, which requires at least one uploaded document.
        """
        if questions:
            session_questions = [Question(**q.model_dump()) for q in questions]
        else:
            session_questions = await self.question_generator.generate_questions(user_id)

        now = datetime.now(timezone.utc)
        session = Session(
            id=new_id(),
            user_id=user_id,
            title=(title or "").strip() or self.default_title(now),
            questions=session_questions,
            responses=[],
            status=SESSION_IN_PROGRESS,
            start_time=now,
        )
        created = await self.sessions.create(session)
        logger.info(f"User {user_id} started session {created.id}")
        return created

    async def list_sessions(self, user_id: str) -> List[Session]:
        return await self.sessions.list_for_user(user_id)

    async def get_session(self, session_id: str, user_id: str) -> Session:
        session = await self.sessions.find_by_id(session_id)
        if session is None:
            raise NotFoundError("Interview session not found")
        if session.user_id != user_id:
            raise ForbiddenError("Not authorized to access this interview session")
        return session

    async def save_response(self,
                            session_id: str,
                            user_id: str,
                            question_id: str,
                            transcription: str = "",
                            duration: Optional[float] = None,
                            audio_reference: Optional[str] = None) -> Session:
        """Records the answer to one question. A later answer replaces an earlier one."""
        session = await self.get_session(session_id, user_id)

        if session.status != SESSION_IN_PROGRESS:
            raise InvalidStateError("Cannot add responses to a completed interview session")
        if session.find_question(question_id) is None:
            raise NotFoundError("Question not found in this interview session")

        session.upsert_response(Response(
            question_id=question_id,
            transcription=transcription,
            duration=duration,
            audio_reference=audio_reference,
        ))
        saved = await self.sessions.save(session)
        logger.debug(f"Saved response for question {question_id} in session {session_id}")
        return saved

    async def end_session(self, session_id: str, user_id: str) -> Session:
        session = await self.get_session(session_id, user_id)
        if session.is_completed:
            raise InvalidStateError("Interview session is already completed")

        session.status = SESSION_COMPLETED
        session.end_time = datetime.now(timezone.utc)
        saved = await self.sessions.save(session)
        logger.info(f"Session {session_id} completed with {len(saved.responses)} responses")
        return saved
