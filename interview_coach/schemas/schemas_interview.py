from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

Difficulty = Literal["easy", "medium", "hard"]
QuestionSource = Literal["cv", "jobSpec", "general"]
SessionStatus = Literal["in-progress", "completed"]

SESSION_IN_PROGRESS: SessionStatus = "in-progress"
SESSION_COMPLETED: SessionStatus = "completed"


def new_id() -> str:
    return str(uuid.uuid4())


class Question(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=new_id)
    text: str
    category: str = "general"
    difficulty: Difficulty = "medium"
    source: QuestionSource = "general"


class Response(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    transcription: str = ""
    audio_reference: Optional[str] = Field(None, alias="audioReference")
    duration: Optional[float] = None


class Session(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    title: str
    questions: List[Question] = Field(default_factory=list)
    responses: List[Response] = Field(default_factory=list)
    status: SessionStatus = SESSION_IN_PROGRESS
    start_time: datetime = Field(alias="startTime")
    end_time: Optional[datetime] = Field(None, alias="endTime")

    @property
    def is_completed(self) -> bool:
        return self.status == SESSION_COMPLETED

    def find_question(self, question_id: str) -> Optional[Question]:
        return next((q for q in self.questions if q.id == question_id), None)

    def upsert_response(self, response: Response) -> None:
        """Store ``response``, replacing any earlier answer to the same question."""
        for index, existing in enumerate(self.responses):
            if existing.question_id == response.question_id:
                self.responses[index] = response
                return
        self.responses.append(response)


# ── request bodies ─────────────────────────────────────────────────────────

class QuestionIn(BaseModel):
    text: constr(min_length=1)
    category: str = "general"
    difficulty: Difficulty = "medium"
    source: QuestionSource = "general"


class SessionCreate(BaseModel):
    title: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None


class ResponseCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    transcription: str = ""
    duration: Optional[float] = Field(None, ge=0)
    audio_reference: Optional[str] = Field(None, alias="audioReference")


class QuestionGenerationRequest(BaseModel):
    count: int = Field(10, ge=1, le=50)
    difficulty: Optional[Difficulty] = None
    categories: Optional[List[str]] = None


class QuestionList(BaseModel):
    count: int
    data: List[Question]
