from sqlalchemy import Column, String, Integer, Text, DateTime, JSON, ForeignKey, Index, CheckConstraint
from sqlalchemy.sql import func

from .base import Base


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True)

    # unique: at most one feedback record per interview session
    interview_id = Column(
        String(36),
        ForeignKey("interview_sessions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    overall_score = Column(Integer, nullable=False)
    summary = Column(Text, nullable=False)
    strengths = Column(JSON, nullable=False, default=list)
    weaknesses = Column(JSON, nullable=False, default=list)
    feedback_items = Column(JSON, nullable=False, default=list)
    suggestions = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("overall_score >= 0 AND overall_score <= 100", name="ck_feedback_score_range"),
        Index("ix_feedback_user_id", "user_id"),
    )
