"""
Persistence for generated interview feedback.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from interview_coach.db.models_feedback import Feedback as FeedbackRow
from interview_coach.errors import ConflictError
from interview_coach.schemas.schemas_feedback import Feedback

logger = logging.getLogger(__name__)


class FeedbackStore:
    """
    Feedback records backed by the ``feedback`` table.

    The unique index on ``interview_id`` is what keeps two concurrent
    generations for the same session from both being stored.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _to_record(row: FeedbackRow) -> Feedback:
        return Feedback(
            id=row.id,
            interview_id=row.interview_id,
            user_id=row.user_id,
            overall_score=row.overall_score,
            summary=row.summary,
            strengths=row.strengths or [],
            weaknesses=row.weaknesses or [],
            feedback_items=row.feedback_items or [],
            suggestions=row.suggestions or [],
            created_at=row.created_at,
        )

    async def find_by_interview_id(self, interview_id: str) -> Optional[Feedback]:
        row = await self.db.scalar(
            select(FeedbackRow).where(FeedbackRow.interview_id == interview_id)
        )
        return self._to_record(row) if row else None

    async def find_by_id(self, feedback_id: str) -> Optional[Feedback]:
        row = await self.db.get(FeedbackRow, feedback_id)
        return self._to_record(row) if row else None

    async def list_for_user(self, user_id: str) -> List[Feedback]:
        res = await self.db.execute(
            select(FeedbackRow)
            .where(FeedbackRow.user_id == user_id)
            .order_by(FeedbackRow.created_at.desc())
        )
        return [self._to_record(row) for row in res.scalars().all()]

    async def create(self, feedback: Feedback) -> Feedback:
        row = FeedbackRow(
            id=feedback.id,
            interview_id=feedback.interview_id,
            user_id=feedback.user_id,
            overall_score=feedback.overall_score,
            summary=feedback.summary,
            strengths=list(feedback.strengths),
            weaknesses=list(feedback.weaknesses),
            feedback_items=[item.model_dump(mode="json", by_alias=True) for item in feedback.feedback_items],
            suggestions=[s.model_dump(mode="json", by_alias=True) for s in feedback.suggestions],
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            # Only the unique index on interview_id maps to a conflict; any
            # other integrity failure is an internal error.
            if await self.find_by_interview_id(feedback.interview_id) is not None:
                logger.warning(f"Duplicate feedback rejected for interview {feedback.interview_id}")
                raise ConflictError("Feedback already exists for this interview session")
            raise

        await self.db.refresh(row)
        logger.info(f"Feedback {row.id} stored for interview {row.interview_id}")
        return self._to_record(row)
