import os
import tempfile

# ======================================================================
#  0. ENVIRONMENT (must be set before the app modules are imported)
# ======================================================================

_DB_DIR = tempfile.mkdtemp(prefix="interview-coach-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'app.db')}"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.pop("OPENAI_API_KEY", None)

import asyncio
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

import pytest
from fastapi.testclient import TestClient

from interview_coach.errors import ConflictError
from interview_coach.llm.client import LlmClient
from interview_coach.schemas.schemas_document import Document
from interview_coach.schemas.schemas_feedback import Feedback
from interview_coach.schemas.schemas_interview import (
    SESSION_COMPLETED,
    Question,
    Response,
    Session,
)

# ======================================================================
#  1. SCRIPTED LLM
# ======================================================================

Reply = Union[str, Exception, Callable[[str, str], str]]


class ScriptedLlm(LlmClient):
    """
    LLM double that answers from a script.

    ``replies`` is consumed in call order; once it runs out ``default`` is used.
    A reply may be a string, an exception instance (raised) or a callable that
    receives (system_prompt, user_prompt).
    """

    def __init__(self, replies: Optional[List[Reply]] = None, default: Reply = "", available: bool = True):
        self.replies = list(replies or [])
        self.default = default
        self.is_available = available
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, system_prompt, user_prompt, max_tokens=1000, temperature=0.7):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        reply = self.replies.pop(0) if self.replies else self.default
        # give other tasks a chance to run, like a real network call would
        await asyncio.sleep(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(system_prompt, user_prompt)
        return reply


# ======================================================================
#  2. IN-MEMORY STORES
# ======================================================================

class InMemorySessionStore:
    def __init__(self, sessions: Optional[List[Session]] = None):
        self.sessions: Dict[str, Session] = {s.id: s for s in sessions or []}
        self.saved: List[Session] = []

    async def find_by_id(self, session_id):
        session = self.sessions.get(session_id)
        return session.model_copy(deep=True) if session else None

    async def list_for_user(self, user_id):
        return [s for s in self.sessions.values() if s.user_id == user_id]

    async def create(self, session):
        self.sessions[session.id] = session.model_copy(deep=True)
        return session

    async def save(self, session):
        self.sessions[session.id] = session.model_copy(deep=True)
        self.saved.append(session)
        return session


class InMemoryFeedbackStore:
    """Enforces one record per interview id at write time, like the unique index."""

    def __init__(self):
        self.records: Dict[str, Feedback] = {}

    async def find_by_interview_id(self, interview_id):
        return next((f for f in self.records.values() if f.interview_id == interview_id), None)

    async def find_by_id(self, feedback_id):
        return self.records.get(feedback_id)

    async def list_for_user(self, user_id):
        return [f for f in reversed(list(self.records.values())) if f.user_id == user_id]

    async def create(self, feedback):
        if await self.find_by_interview_id(feedback.interview_id) is not None:
            raise ConflictError("Feedback already exists for this interview session")
        self.records[feedback.id] = feedback
        return feedback


class InMemoryDocumentStore:
    def __init__(self, documents: Optional[List[Document]] = None):
        self.documents: Dict[str, Document] = {d.id: d for d in documents or []}

    async def find_by_user_and_type(self, user_id, doc_type):
        return next(
            (d for d in self.documents.values() if d.user_id == user_id and d.type == doc_type),
            None,
        )

    async def find_by_id(self, document_id):
        document = self.documents.get(document_id)
        return document.model_copy(deep=True) if document else None

    async def list_for_user(self, user_id):
        return [d for d in self.documents.values() if d.user_id == user_id]

    async def create(self, user_id, doc_type, title, content):
        document = Document(id=str(uuid.uuid4()), user_id=user_id, type=doc_type, title=title, content=content)
        self.documents[document.id] = document
        return document

    async def update(self, document):
        self.documents[document.id] = document.model_copy(deep=True)
        return document

    async def delete(self, document_id):
        del self.documents[document_id]


# ======================================================================
#  3. BUILDERS
# ======================================================================

def make_document(user_id: str, doc_type: str, content: str) -> Document:
    return Document(id=str(uuid.uuid4()), user_id=user_id, type=doc_type, title=f"My {doc_type}", content=content)


def make_session(user_id: str = "user-1",
                 answers: Optional[Dict[str, str]] = None,
                 question_count: int = 2,
                 status: str = SESSION_COMPLETED) -> Session:
    """
    Session with questions q1..qN. ``answers`` maps question ids to transcriptions.
    """
    questions = [Question(id=f"q{i}", text=f"Question {i}?") for i in range(1, question_count + 1)]
    responses = [Response(question_id=qid, transcription=text) for qid, text in (answers or {}).items()]
    return Session(
        id=str(uuid.uuid4()),
        user_id=user_id,
        title="Practice",
        questions=questions,
        responses=responses,
        status=status,
        start_time=datetime.now(timezone.utc),
    )


def feedback_json(*sentiments: str, category: str = "content") -> str:
    """LLM reply text carrying one feedback item per sentiment and one suggestion."""
    return json.dumps({
        "feedbackItems": [
            {"category": category, "sentiment": s, "content": f"{s} remark"} for s in sentiments
        ],
        "suggestions": [{"category": category, "content": "Add numbers to your examples."}],
    })


# ======================================================================
#  4. API FIXTURES
# ======================================================================

@pytest.fixture
def scripted_llm():
    return ScriptedLlm()


@pytest.fixture
def api(scripted_llm):
    """TestClient with the LLM collaborator replaced by ``scripted_llm``."""
    from interview_coach.main import app
    from interview_coach.routers.util.dependencies import get_llm_client

    app.dependency_overrides[get_llm_client] = lambda: scripted_llm
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    app.dependency_overrides.clear()


class ApiUser:
    """A registered user plus helpers for authenticated calls."""

    def __init__(self, client: TestClient, name: str = "Test User"):
        self.client = client
        self.email = f"{uuid.uuid4().hex[:12]}@example.com"
        self.password = "secret123"
        resp = client.post("/auth/register", json={"name": name, "email": self.email, "password": self.password})
        assert resp.status_code == 201, f"Registration failed: {resp.text}"
        body = resp.json()
        self.id = body["user"]["id"]
        self.headers = {"Authorization": f"Bearer {body['access_token']}"}

    def get(self, url, **kwargs):
        return self.client.get(url, headers=self.headers, **kwargs)

    def post(self, url, **kwargs):
        return self.client.post(url, headers=self.headers, **kwargs)

    def put(self, url, **kwargs):
        return self.client.put(url, headers=self.headers, **kwargs)

    def delete(self, url, **kwargs):
        return self.client.delete(url, headers=self.headers, **kwargs)

    def completed_session(self, answers: Dict[int, str], question_count: int = 2) -> Dict[str, Any]:
        """Creates a session with explicit questions, answers by index, and ends it."""
        questions = [{"text": f"Question {i}?"} for i in range(1, question_count + 1)]
        resp = self.post("/interviews/sessions", json={"title": "Practice", "questions": questions})
        assert resp.status_code == 201, resp.text
        session = resp.json()
        for index, text in answers.items():
            qid = session["questions"][index]["id"]
            resp = self.post(
                f"/interviews/sessions/{session['id']}/responses",
                json={"questionId": qid, "transcription": text, "duration": 12.5},
            )
            assert resp.status_code == 200, resp.text
        resp = self.put(f"/interviews/sessions/{session['id']}/end")
        assert resp.status_code == 200, resp.text
        return resp.json()


@pytest.fixture
def user(api):
    return ApiUser(api)


@pytest.fixture
def other_user(api):
    return ApiUser(api, name="Other User")


def reply_by_prompt(routes: Dict[str, str], default: str = "") -> Callable[[str, str], str]:
    """Reply callable picking the first route whose key occurs in the user prompt."""
    def _reply(system_prompt: str, user_prompt: str) -> str:
        for needle, reply in routes.items():
            if needle in user_prompt:
                return reply
        return default
    return _reply
