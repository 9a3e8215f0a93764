"""
Persistence for interview sessions. Questions and responses are stored as
embedded JSON lists and validated into pydantic records on the way out.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from interview_coach.db.models_interview import InterviewSession
from interview_coach.errors import NotFoundError
from interview_coach.schemas.schemas_interview import Session

logger = logging.getLogger(__name__)


class SessionStore:

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _to_record(row: InterviewSession) -> Session:
        return Session(
            id=row.id,
            user_id=row.user_id,
            title=row.title,
            questions=row.questions or [],
            responses=row.responses or [],
            status=row.status,
            start_time=row.start_time,
            end_time=row.end_time,
        )

    @staticmethod
    def _apply(row: InterviewSession, session: Session) -> None:
        row.title = session.title
        row.questions = [q.model_dump(mode="json", by_alias=True) for q in session.questions]
        row.responses = [r.model_dump(mode="json", by_alias=True) for r in session.responses]
        row.status = session.status
        row.start_time = session.start_time
        row.end_time = session.end_time

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        row = await self.db.get(InterviewSession, session_id)
        return self._to_record(row) if row else None

    async def list_for_user(self, user_id: str) -> List[Session]:
        res = await self.db.execute(
            select(InterviewSession)
            .where(InterviewSession.user_id == user_id)
            .order_by(InterviewSession.created_at.desc())
        )
        return [self._to_record(row) for row in res.scalars().all()]

    async def create(self, session: Session) -> Session:
        row = InterviewSession(id=session.id, user_id=session.user_id)
        self._apply(row, session)
        self.db.add(row)
        await self.db.commit()
        logger.info(f"Created interview session {session.id} with {len(session.questions)} questions")
        return session

    async def save(self, session: Session) -> Session:
        row = await self.db.get(InterviewSession, session.id)
        if row is None:
            raise NotFoundError("Interview session not found")
        self._apply(row, session)
        await self.db.commit()
        return session
