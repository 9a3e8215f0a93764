"""
Session management module for interview practice sessions.
"""

from interview_coach.interview.session.interview_service import InterviewService
