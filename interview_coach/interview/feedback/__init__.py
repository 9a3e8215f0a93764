"""
Interview feedback pipeline: per-question feedback, aggregation and the
orchestrator that ties them to a session.
"""

from interview_coach.interview.feedback.question_feedback import QuestionFeedbackGenerator
from interview_coach.interview.feedback.aggregator import OverallFeedbackAggregator
from interview_coach.interview.feedback.orchestrator import FeedbackOrchestrator
