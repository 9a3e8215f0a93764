"""
Combines per-question feedback into the overall score, summary, strengths
and weaknesses of an interview session.
"""

import logging
import math
from typing import List, Sequence

from interview_coach.llm.client import LlmClient
from interview_coach.llm.template_store import render_system_prompt, render_template
from interview_coach.schemas.schemas_feedback import MAX_HIGHLIGHTS, FeedbackItem, OverallFeedback
from interview_coach.schemas.schemas_interview import Question, Response

logger = logging.getLogger(__name__)

RESPONSE_RATE_WEIGHT = 40
POSITIVE_RATIO_WEIGHT = 60

NO_STRENGTHS = "No specific strengths identified."
NO_WEAKNESSES = "No specific areas for improvement identified."
EMPTY_SUMMARY = "Interview feedback summary not available."

DEFAULT_OVERALL_FEEDBACK = OverallFeedback(
    overall_score=70,
    summary=(
        "Thank you for completing the interview practice. We were unable to generate a "
        "detailed summary, but you can review individual feedback for each question."
    ),
    strengths=["Completed the interview session."],
    weaknesses=["Consider providing more detailed responses."],
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_score(question_count: int, response_count: int, feedback_items: Sequence[FeedbackItem]) -> int:
    """
    round(response_rate * 40 + positive_ratio * 60), with both ratios taken as 0
    when their denominator is empty.
    """
    response_rate = response_count / question_count if question_count else 0.0
    positives = sum(1 for item in feedback_items if item.sentiment == "positive")
    positive_ratio = positives / len(feedback_items) if feedback_items else 0.0

    score = round_half_up(response_rate * RESPONSE_RATE_WEIGHT + positive_ratio * POSITIVE_RATIO_WEIGHT)
    return max(0, min(100, score))


def contents_with_sentiment(feedback_items: Sequence[FeedbackItem], sentiment: str) -> List[str]:
    return [item.content for item in feedback_items if item.sentiment == sentiment][:MAX_HIGHLIGHTS]


class OverallFeedbackAggregator:
    """
    Builds the session-level part of a Feedback record.

    The summary is written by the LLM when one is configured and from a fixed
    template otherwise. If anything at all fails, a conservative default
    (score 70) is returned instead.
    """

    SUMMARY_TEMPLATE = "overall_summary"
    OFFLINE_TEMPLATE = "overall_summary_offline"
    MAX_TOKENS = 200
    TEMPERATURE = 0.7

    def __init__(self, llm: LlmClient):
        self.llm = llm

    async def aggregate(self,
                        questions: Sequence[Question],
                        responses: Sequence[Response],
                        feedback_items: Sequence[FeedbackItem]) -> OverallFeedback:
        try:
            overall_score = compute_score(len(questions), len(responses), feedback_items)
            positives = contents_with_sentiment(feedback_items, "positive")
            negatives = contents_with_sentiment(feedback_items, "negative")

            summary = await self._summarize(
                question_count=len(questions),
                response_count=len(responses),
                strengths=positives,
                weaknesses=negatives,
                overall_score=overall_score,
            )

            return OverallFeedback(
                overall_score=overall_score,
                summary=summary,
                strengths=positives or [NO_STRENGTHS],
                weaknesses=negatives or [NO_WEAKNESSES],
            )
        except Exception as e:
            logger.error(f"Overall feedback aggregation failed, using default: {e}", exc_info=True)
            return DEFAULT_OVERALL_FEEDBACK.model_copy(deep=True)

    async def _summarize(self,
                         question_count: int,
                         response_count: int,
                         strengths: List[str],
                         weaknesses: List[str],
                         overall_score: int) -> str:
        if not self.llm.is_available:
            return render_template(
                self.OFFLINE_TEMPLATE,
                response_count=response_count,
                question_count=question_count,
                overall_score=overall_score,
            )

        content = await self.llm.complete(
            render_system_prompt(self.SUMMARY_TEMPLATE),
            render_template(
                self.SUMMARY_TEMPLATE,
                question_count=question_count,
                response_count=response_count,
                strengths=", ".join(strengths),
                weaknesses=", ".join(weaknesses),
                overall_score=overall_score,
            ),
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
        )
        return (content or "").strip() or EMPTY_SUMMARY
