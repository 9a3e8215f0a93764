from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

FeedbackCategory = Literal["content", "delivery", "language", "confidence"]
Sentiment = Literal["positive", "negative", "neutral"]

MAX_HIGHLIGHTS = 5


class FeedbackItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    category: FeedbackCategory
    sentiment: Sentiment
    content: str


class Suggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(alias="questionId")
    category: FeedbackCategory
    content: str


class QuestionFeedback(BaseModel):
    feedback_items: List[FeedbackItem] = Field(default_factory=list)
    suggestions: List[Suggestion] = Field(default_factory=list)


class OverallFeedback(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    summary: str
    strengths: List[str] = Field(max_length=MAX_HIGHLIGHTS)
    weaknesses: List[str] = Field(max_length=MAX_HIGHLIGHTS)


class Feedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    interview_id: str = Field(alias="interviewId")
    user_id: str = Field(alias="userId")
    overall_score: int = Field(alias="overallScore", ge=0, le=100)
    summary: str
    strengths: List[str] = Field(default_factory=list, max_length=MAX_HIGHLIGHTS)
    weaknesses: List[str] = Field(default_factory=list, max_length=MAX_HIGHLIGHTS)
    feedback_items: List[FeedbackItem] = Field(default_factory=list, alias="feedbackItems")
    suggestions: List[Suggestion] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, alias="createdAt")


# ── raw LLM payload ────────────────────────────────────────────────────────
# The shape the per-question prompt asks for. Items have no question id yet;
# the generator stamps it on after validation.

class LlmFeedbackItem(BaseModel):
    category: FeedbackCategory
    sentiment: Sentiment
    content: constr(strip_whitespace=True, min_length=1)


class LlmSuggestion(BaseModel):
    category: FeedbackCategory
    content: constr(strip_whitespace=True, min_length=1)


class LlmQuestionFeedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    feedback_items: List[LlmFeedbackItem] = Field(default_factory=list, alias="feedbackItems")
    suggestions: List[LlmSuggestion] = Field(default_factory=list)
