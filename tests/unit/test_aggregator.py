import asyncio

import pytest

from conftest import ScriptedLlm
from interview_coach.interview.feedback.aggregator import (
    DEFAULT_OVERALL_FEEDBACK,
    EMPTY_SUMMARY,
    NO_STRENGTHS,
    NO_WEAKNESSES,
    OverallFeedbackAggregator,
    compute_score,
    contents_with_sentiment,
)
from interview_coach.llm.client import MockLlmClient
from interview_coach.schemas.schemas_feedback import FeedbackItem
from interview_coach.schemas.schemas_interview import Question, Response


def items(*sentiments):
    return [
        FeedbackItem(question_id="q1", category="content", sentiment=s, content=f"{s} #{i}")
        for i, s in enumerate(sentiments)
    ]


def questions(n):
    return [Question(id=f"q{i}", text=f"Question {i}?") for i in range(n)]


def responses(n):
    return [Response(question_id=f"q{i}", transcription="answer") for i in range(n)]


# ======================================================================
#  SCORE
# ======================================================================

def test_full_response_rate_and_three_of_four_positive_scores_85():
    assert compute_score(2, 2, items("positive", "positive", "positive", "negative")) == 85


def test_no_questions_counts_as_zero_response_rate():
    assert compute_score(0, 0, []) == 0
    assert compute_score(0, 0, items("positive")) == 60


def test_no_feedback_items_counts_as_zero_positive_ratio():
    assert compute_score(4, 2, []) == 20


def test_halves_round_up():
    # 1/16 * 40 == 2.5
    assert compute_score(16, 1, []) == 3


def test_score_is_clamped_to_range():
    # more responses than questions cannot push the score past 100
    assert compute_score(1, 3, items("positive")) == 100


# ======================================================================
#  STRENGTHS / WEAKNESSES
# ======================================================================

def test_highlights_keep_order_and_cap_at_five():
    feedback = items(*(["positive"] * 7 + ["negative"]))

    assert contents_with_sentiment(feedback, "positive") == [f"positive #{i}" for i in range(5)]


def test_missing_highlights_fall_back_to_placeholders():
    overall = asyncio.run(
        OverallFeedbackAggregator(ScriptedLlm(available=False)).aggregate(questions(1), responses(1), items("neutral"))
    )

    assert overall.strengths == [NO_STRENGTHS]
    assert overall.weaknesses == [NO_WEAKNESSES]


# ======================================================================
#  AGGREGATE
# ======================================================================

def test_offline_summary_uses_fixed_template_without_calling_llm():
    llm = ScriptedLlm(available=False, default="should not be used")

    overall = asyncio.run(
        OverallFeedbackAggregator(llm).aggregate(questions(3), responses(2), items("positive", "negative"))
    )

    assert llm.calls == []
    # 2/3*40 + 1/2*60 = 56.67
    assert overall.overall_score == 57
    assert overall.summary == (
        "You completed 2 out of 3 questions with an overall score of 57/100. "
        "Focus on improving the areas highlighted in your feedback."
    )
    assert overall.strengths == ["positive #0"]
    assert overall.weaknesses == ["negative #1"]


def test_mock_client_takes_the_offline_path():
    overall = asyncio.run(
        OverallFeedbackAggregator(MockLlmClient()).aggregate(questions(1), responses(1), items("positive"))
    )

    assert overall.summary.startswith("You completed 1 out of 1 questions")


def test_llm_summary_is_trimmed_and_prompt_lists_highlights():
    llm = ScriptedLlm(["   A confident, well structured interview.\n"])

    overall = asyncio.run(
        OverallFeedbackAggregator(llm).aggregate(
            questions(2), responses(2), items("positive", "positive", "positive", "negative")
        )
    )

    assert overall.overall_score == 85
    assert overall.summary == "A confident, well structured interview."
    call = llm.calls[0]
    assert "positive #0, positive #1, positive #2" in call["user_prompt"]
    assert "The overall score is 85/100." in call["user_prompt"]
    assert (call["max_tokens"], call["temperature"]) == (200, 0.7)


def test_summary_prompt_lists_no_placeholders_when_nothing_was_positive_or_negative():
    llm = ScriptedLlm(["Keep practicing."])

    overall = asyncio.run(OverallFeedbackAggregator(llm).aggregate(questions(1), responses(1), items("neutral")))

    prompt = llm.calls[0]["user_prompt"]
    assert "received positive feedback on: \n" in prompt
    assert "Areas for improvement include: \n" in prompt
    assert NO_STRENGTHS not in prompt
    assert NO_WEAKNESSES not in prompt
    assert overall.strengths == [NO_STRENGTHS]


def test_blank_llm_summary_is_replaced():
    overall = asyncio.run(OverallFeedbackAggregator(ScriptedLlm(["  "])).aggregate(questions(1), responses(1), []))

    assert overall.summary == EMPTY_SUMMARY


def test_summary_failure_returns_safety_net():
    llm = ScriptedLlm([ConnectionError("LLM unreachable")])

    overall = asyncio.run(
        OverallFeedbackAggregator(llm).aggregate(questions(2), responses(2), items("positive", "positive"))
    )

    assert overall.overall_score == 70
    assert overall.strengths == ["Completed the interview session."]
    assert overall.weaknesses == ["Consider providing more detailed responses."]
    assert overall.summary == DEFAULT_OVERALL_FEEDBACK.summary


def test_safety_net_is_a_fresh_copy():
    aggregator = OverallFeedbackAggregator(ScriptedLlm([RuntimeError("boom"), RuntimeError("boom")]))

    first = asyncio.run(aggregator.aggregate(questions(1), responses(1), []))
    first.strengths.append("mutated")
    second = asyncio.run(aggregator.aggregate(questions(1), responses(1), []))

    assert second.strengths == ["Completed the interview session."]


@pytest.mark.parametrize("question_count, response_count", [(0, 0), (0, 1)])
def test_empty_question_list_never_divides_by_zero(question_count, response_count):
    overall = asyncio.run(
        OverallFeedbackAggregator(ScriptedLlm(available=False)).aggregate(
            questions(question_count), responses(response_count), []
        )
    )

    assert overall.overall_score == 0
