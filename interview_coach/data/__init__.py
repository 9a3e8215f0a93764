"""
Data access layer: SQLAlchemy-backed stores that hand out pydantic records.
"""

from interview_coach.data.document_store import DocumentStore
from interview_coach.data.session_store import SessionStore
from interview_coach.data.feedback_store import FeedbackStore
