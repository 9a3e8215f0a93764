"""
Feedback for a single question/response pair.
"""

import logging

from pydantic import ValidationError

from interview_coach.errors import LlmOutputError
from interview_coach.llm.client import LlmClient
from interview_coach.llm.template_store import render_system_prompt, render_template
from interview_coach.llm.utils import parse_json_payload
from interview_coach.schemas.schemas_feedback import (
    FeedbackItem,
    LlmQuestionFeedback,
    QuestionFeedback,
    Suggestion,
)

logger = logging.getLogger(__name__)

FALLBACK_FEEDBACK_TEXT = "We were unable to generate detailed feedback for this response."
FALLBACK_SUGGESTION_TEXT = "Consider providing more specific examples in your answer."


class QuestionFeedbackGenerator:
    """
    Asks the LLM for categorized feedback items and suggestions on one answer.

    A single attempt is made per answer. Whatever goes wrong (API error,
    no JSON in the reply, JSON of the wrong shape) is logged and replaced by
    the neutral fallback, so callers never see an exception from here.
    """

    TEMPLATE = "question_feedback"
    MAX_TOKENS = 1000
    TEMPERATURE = 0.7

    def __init__(self, llm: LlmClient):
        self.llm = llm

    async def generate(self, question_id: str, question_text: str, response_text: str) -> QuestionFeedback:
        """
        Args:
            question_id: Id of the question the feedback belongs to
            question_text: The question as asked
            response_text: The candidate's transcribed answer (non-empty)

        Returns:
            QuestionFeedback whose items all carry ``question_id``
        """
        try:
            raw = await self.llm.complete(
                render_system_prompt(self.TEMPLATE),
                render_template(self.TEMPLATE, question=question_text, response=response_text),
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
            )
            payload = parse_json_payload(raw, "{")
            parsed = LlmQuestionFeedback.model_validate(payload)
        except (LlmOutputError, ValidationError) as e:
            logger.warning(f"Unusable feedback output for question {question_id}: {e}")
            return self.fallback(question_id)
        except Exception as e:
            logger.error(f"LLM feedback request failed for question {question_id}: {e}")
            return self.fallback(question_id)

        return QuestionFeedback(
            feedback_items=[
                FeedbackItem(
                    question_id=question_id,
                    category=item.category,
                    sentiment=item.sentiment,
                    content=item.content,
                )
                for item in parsed.feedback_items
            ],
            suggestions=[
                Suggestion(question_id=question_id, category=s.category, content=s.content)
                for s in parsed.suggestions
            ],
        )

    @staticmethod
    def fallback(question_id: str) -> QuestionFeedback:
        return QuestionFeedback(
            feedback_items=[
                FeedbackItem(
                    question_id=question_id,
                    category="content",
                    sentiment="neutral",
                    content=FALLBACK_FEEDBACK_TEXT,
                )
            ],
            suggestions=[
                Suggestion(question_id=question_id, category="content", content=FALLBACK_SUGGESTION_TEXT)
            ],
        )
