from sqlalchemy import Column, String, DateTime, JSON, ForeignKey, Index
from sqlalchemy.sql import func

from .base import Base


class InterviewSession(Base):
    __tablename__ = "interview_sessions"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(200), nullable=False)

    # ordered list of question dicts / list of response dicts
    questions = Column(JSON, nullable=False, default=list)
    responses = Column(JSON, nullable=False, default=list)

    status = Column(String(16), nullable=False, default="in-progress")
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_interview_sessions_user_id", "user_id"),
        Index("ix_interview_sessions_created_at", "created_at"),
    )
