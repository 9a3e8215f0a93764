import asyncio
import json

import pytest

from conftest import ScriptedLlm, feedback_json
from interview_coach.interview.feedback.question_feedback import (
    FALLBACK_FEEDBACK_TEXT,
    FALLBACK_SUGGESTION_TEXT,
    QuestionFeedbackGenerator,
)


def run_generate(llm, question_id="q1", question="Why this role?", response="I love the product."):
    return asyncio.run(QuestionFeedbackGenerator(llm).generate(question_id, question, response))


def assert_is_fallback(result, question_id):
    assert len(result.feedback_items) == 1
    item = result.feedback_items[0]
    assert (item.question_id, item.category, item.sentiment) == (question_id, "content", "neutral")
    assert item.content == FALLBACK_FEEDBACK_TEXT
    assert len(result.suggestions) == 1
    suggestion = result.suggestions[0]
    assert (suggestion.question_id, suggestion.category) == (question_id, "content")
    assert suggestion.content == FALLBACK_SUGGESTION_TEXT


def test_valid_reply_is_parsed_and_stamped_with_question_id():
    llm = ScriptedLlm([feedback_json("positive", "negative", category="delivery")])

    result = run_generate(llm, question_id="q-42")

    assert [i.sentiment for i in result.feedback_items] == ["positive", "negative"]
    assert all(i.question_id == "q-42" for i in result.feedback_items)
    assert all(s.question_id == "q-42" for s in result.suggestions)
    assert result.feedback_items[0].category == "delivery"


def test_prompt_carries_question_and_answer_with_expected_limits():
    llm = ScriptedLlm([feedback_json("positive")])

    run_generate(llm, question="Tell me about a conflict.", response="Once, my team disagreed...")

    assert len(llm.calls) == 1
    call = llm.calls[0]
    assert "Question: Tell me about a conflict." in call["user_prompt"]
    assert "Response: Once, my team disagreed..." in call["user_prompt"]
    assert call["max_tokens"] == 1000
    assert call["temperature"] == 0.7


def test_json_wrapped_in_prose_is_accepted():
    reply = "Here is my analysis:\n```json\n" + feedback_json("neutral") + "\n```\nGood luck!"

    result = run_generate(ScriptedLlm([reply]))

    assert [i.sentiment for i in result.feedback_items] == ["neutral"]


def test_missing_lists_default_to_empty():
    result = run_generate(ScriptedLlm(['{"feedbackItems": []}']))

    assert result.feedback_items == []
    assert result.suggestions == []


@pytest.mark.parametrize("reply", [
    "I cannot produce JSON today.",
    '{"feedbackItems": [{"category": "content", "sentiment": "positive"',
    json.dumps({"feedbackItems": [{"category": "style", "sentiment": "positive", "content": "x"}]}),
    json.dumps({"feedbackItems": [{"category": "content", "sentiment": "great", "content": "x"}]}),
    json.dumps({"feedbackItems": [{"category": "content", "sentiment": "positive"}]}),
    json.dumps({"feedbackItems": "not a list"}),
])
def test_unusable_reply_yields_fallback(reply):
    assert_is_fallback(run_generate(ScriptedLlm([reply]), question_id="q7"), "q7")


def test_llm_failure_yields_fallback_without_retry():
    llm = ScriptedLlm([TimeoutError("upstream timed out")], default=feedback_json("positive"))

    result = run_generate(llm, question_id="q3")

    assert_is_fallback(result, "q3")
    assert len(llm.calls) == 1
