"""
Interface definitions for the stores the domain services depend on.
"""

from typing import List, Optional, Protocol

from interview_coach.schemas.schemas_document import Document
from interview_coach.schemas.schemas_feedback import Feedback
from interview_coach.schemas.schemas_interview import Session


class DocumentReader(Protocol):
    """Protocol for looking up a user's uploaded documents."""

    async def find_by_user_and_type(self, user_id: str, doc_type: str) -> Optional[Document]:
        """Get the user's document of the given type, if any."""
        ...


class DocumentRepository(DocumentReader, Protocol):
    """Protocol for full document persistence."""

    async def find_by_id(self, document_id: str) -> Optional[Document]:
        """Get a document by id."""
        ...

    async def list_for_user(self, user_id: str) -> List[Document]:
        """All documents of a user, newest first."""
        ...

    async def create(self, user_id: str, doc_type: str, title: str, content: str) -> Document:
        """Insert a new document. Raises ConflictError if the user already has one of this type."""
        ...

    async def update(self, document: Document) -> Document:
        """Persist the current state of a document."""
        ...

    async def delete(self, document_id: str) -> None:
        """Remove a document. Raises NotFoundError if it does not exist."""
        ...


class SessionRepository(Protocol):
    """Protocol for interview session persistence."""

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        """Get a session by id."""
        ...

    async def list_for_user(self, user_id: str) -> List[Session]:
        """All sessions of a user, newest first."""
        ...

    async def create(self, session: Session) -> Session:
        """Insert a new session."""
        ...

    async def save(self, session: Session) -> Session:
        """Persist the current state of a session."""
        ...


class FeedbackRepository(Protocol):
    """Protocol for feedback persistence."""

    async def find_by_interview_id(self, interview_id: str) -> Optional[Feedback]:
        """Get the feedback generated for a session, if any."""
        ...

    async def find_by_id(self, feedback_id: str) -> Optional[Feedback]:
        """Get a feedback record by id."""
        ...

    async def list_for_user(self, user_id: str) -> List[Feedback]:
        """All feedback of a user, newest first."""
        ...

    async def create(self, feedback: Feedback) -> Feedback:
        """Insert a new record. Raises ConflictError if the session already has one."""
        ...
