"""
Feedback generation for a completed interview session.

Flow of ``generate_feedback``:
1. load the session (404)
2. check ownership (403)
3. require status "completed" (400)
4. reject if feedback already exists (409)
5. require at least one response (400)
6. per-question feedback for every answered question, in question order
7. aggregate into score, summary, strengths and weaknesses
8. persist (the store's unique index turns a lost race into 409)
9. return the stored record
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from interview_coach.data.interfaces import FeedbackRepository, SessionRepository
from interview_coach.errors import ConflictError, ForbiddenError, InvalidStateError, NotFoundError
from interview_coach.interview.feedback.aggregator import OverallFeedbackAggregator
from interview_coach.interview.feedback.question_feedback import QuestionFeedbackGenerator
from interview_coach.schemas.schemas_feedback import Feedback, FeedbackItem, QuestionFeedback, Suggestion
from interview_coach.schemas.schemas_interview import Question, Session, new_id

logger = logging.getLogger(__name__)


class FeedbackOrchestrator:
    """
    Coordinates the per-question generator and the aggregator across a session
    and stores the result exactly once.
    """

    def __init__(self,
                 session_store: SessionRepository,
                 feedback_store: FeedbackRepository,
                 question_feedback: QuestionFeedbackGenerator,
                 aggregator: OverallFeedbackAggregator,
                 concurrency: int = 3):
        self.session_store = session_store
        self.feedback_store = feedback_store
        self.question_feedback = question_feedback
        self.aggregator = aggregator
        self.concurrency = max(1, concurrency)

    async def _load_owned_session(self, session_id: str, user_id: str) -> Session:
        session = await self.session_store.find_by_id(session_id)
        if session is None:
            raise NotFoundError("Interview session not found")
        if session.user_id != user_id:
            raise ForbiddenError("Not authorized to access this interview session")
        return session

    async def generate_feedback(self, session_id: str, requesting_user_id: str) -> Feedback:
        session = await self._load_owned_session(session_id, requesting_user_id)

        if not session.is_completed:
            raise InvalidStateError("Interview session must be completed before generating feedback")

        if await self.feedback_store.find_by_interview_id(session_id) is not None:
            raise ConflictError("Feedback already exists for this interview session")

        if not session.responses:
            raise InvalidStateError("No responses found for this interview session")

        answered = self._answered_questions(session)
        logger.info(
            f"Generating feedback for session {session_id}: "
            f"{len(answered)} answered of {len(session.questions)} questions"
        )

        feedback_items, suggestions = await self._collect_question_feedback(answered)
        overall = await self.aggregator.aggregate(session.questions, session.responses, feedback_items)

        feedback = Feedback(
            id=new_id(),
            interview_id=session.id,
            user_id=session.user_id,
            overall_score=overall.overall_score,
            summary=overall.summary,
            strengths=overall.strengths,
            weaknesses=overall.weaknesses,
            feedback_items=feedback_items,
            suggestions=suggestions,
        )
        stored = await self.feedback_store.create(feedback)
        logger.info(f"Feedback {stored.id} created for session {session_id} (score {stored.overall_score})")
        return stored

    @staticmethod
    def _answered_questions(session: Session) -> List[Tuple[Question, str]]:
        """Questions in session order paired with a non-empty transcription."""
        responses = {response.question_id: response for response in session.responses}
        answered = []
        for question in session.questions:
            response = responses.get(question.id)
            if response is None:
                continue
            transcription = (response.transcription or "").strip()
            if transcription:
                answered.append((question, transcription))
        return answered

    async def _collect_question_feedback(
        self, answered: List[Tuple[Question, str]]
    ) -> Tuple[List[FeedbackItem], List[Suggestion]]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _one(question: Question, transcription: str) -> QuestionFeedback:
            async with semaphore:
                return await self.question_feedback.generate(question.id, question.text, transcription)

        # gather keeps results in argument order, i.e. question order
        results = await asyncio.gather(*(_one(q, t) for q, t in answered))

        feedback_items: List[FeedbackItem] = []
        suggestions: List[Suggestion] = []
        for result in results:
            feedback_items.extend(result.feedback_items)
            suggestions.extend(result.suggestions)
        return feedback_items, suggestions

    # ── read side ──────────────────────────────────────────────────────────

    async def get_feedback_for_session(self, session_id: str, requesting_user_id: str) -> Feedback:
        await self._load_owned_session(session_id, requesting_user_id)
        feedback = await self.feedback_store.find_by_interview_id(session_id)
        if feedback is None:
            raise NotFoundError("Feedback not found for this interview session")
        return feedback

    async def get_feedback(self, feedback_id: str, requesting_user_id: str) -> Feedback:
        feedback: Optional[Feedback] = await self.feedback_store.find_by_id(feedback_id)
        if feedback is None:
            raise NotFoundError("Feedback not found")
        if feedback.user_id != requesting_user_id:
            raise ForbiddenError("Not authorized to access this feedback")
        return feedback

    async def list_feedback_for_user(self, user_id: str) -> List[Feedback]:
        return await self.feedback_store.list_for_user(user_id)
