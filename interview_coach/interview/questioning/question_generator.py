"""
Question Generation for interview practice sessions.
Builds interview questions from the user's CV and job specification.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from interview_coach.data.interfaces import DocumentReader
from interview_coach.errors import InvalidStateError, LlmOutputError
from interview_coach.llm.client import LlmClient
from interview_coach.llm.template_store import render_system_prompt, render_template
from interview_coach.llm.utils import parse_json_payload
from interview_coach.schemas.schemas_interview import Question

logger = logging.getLogger(__name__)

DIFFICULTIES = ("easy", "medium", "hard")
SOURCES = ("cv", "jobSpec", "general")

DEFAULT_QUESTIONS: List[Dict[str, str]] = [
    {
        "text": "Tell me about yourself and your background.",
        "category": "general",
        "difficulty": "easy",
        "source": "general",
    },
    {
        "text": "What are your greatest strengths and weaknesses?",
        "category": "personal",
        "difficulty": "medium",
        "source": "general",
    },
    {
        "text": "Why are you interested in this position?",
        "category": "motivation",
        "difficulty": "medium",
        "source": "general",
    },
    {
        "text": "Describe a challenging situation you faced and how you handled it.",
        "category": "behavioral",
        "difficulty": "medium",
        "source": "general",
    },
    {
        "text": "Where do you see yourself in five years?",
        "category": "career",
        "difficulty": "medium",
        "source": "general",
    },
]


class QuestionGenerator:
    """
    Generates interview questions with the LLM, falling back to a fixed set of
    generic questions whenever the LLM cannot deliver a usable list.
    """

    TEMPLATE = "question_generation"
    MAX_TOKENS = 1500
    TEMPERATURE = 0.7

    def __init__(self, documents: DocumentReader, llm: LlmClient):
        self.documents = documents
        self.llm = llm

    async def generate_questions(self,
                                 user_id: str,
                                 count: int = 10,
                                 difficulty: Optional[str] = None,
                                 categories: Optional[Sequence[str]] = None) -> List[Question]:
        """
        Args:
            user_id: Owner of the CV / job specification
            count: Maximum number of questions to return
            difficulty: Optional difficulty hint for the prompt
            categories: Optional category hints for the prompt

        Returns:
            Up to ``count`` questions, or the default questions on failure

        Raises:
            InvalidStateError: If the user has neither a CV nor a job specification
        """
        cv = await self.documents.find_by_user_and_type(user_id, "cv")
        job_spec = await self.documents.find_by_user_and_type(user_id, "jobSpec")

        if cv is None and job_spec is None:
            raise InvalidStateError("No CV or job specification found. Please upload at least one document.")

        document_context = ""
        if cv is not None:
            document_context += f"CV/Resume: {cv.content}\n\n"
        if job_spec is not None:
            document_context += f"Job Specification: {job_spec.content}\n\n"

        prompt = render_template(
            self.TEMPLATE,
            document_context=document_context,
            count=count,
            hints=self._build_hints(difficulty, categories),
        )

        try:
            raw = await self.llm.complete(
                render_system_prompt(self.TEMPLATE),
                prompt,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
            )
            questions = self._parse_questions(raw, count)
        except LlmOutputError as e:
            logger.warning(f"Unusable question output for user {user_id}: {e}")
            return self.default_questions()
        except Exception as e:
            logger.error(f"LLM question generation failed for user {user_id}: {e}")
            return self.default_questions()

        logger.info(f"Generated {len(questions)} questions for user {user_id}")
        return questions

    @staticmethod
    def _build_hints(difficulty: Optional[str], categories: Optional[Sequence[str]]) -> str:
        hints = ""
        if difficulty:
            hints += f"The questions should be of {difficulty} difficulty. "
        if categories:
            hints += f"Focus on the following categories: {', '.join(categories)}. "
        return hints.strip()

    @staticmethod
    def _to_question(item: Any) -> Optional[Question]:
        if not isinstance(item, dict):
            return None
        text = item.get("text")
        if not isinstance(text, str) or not text.strip():
            return None

        category = item.get("category")
        difficulty = item.get("difficulty")
        source = item.get("source")
        return Question(
            text=text.strip(),
            category=category.strip() if isinstance(category, str) and category.strip() else "general",
            difficulty=difficulty if difficulty in DIFFICULTIES else "medium",
            source=source if source in SOURCES else "general",
        )

    def _parse_questions(self, raw: str, count: int) -> List[Question]:
        payload = parse_json_payload(raw, "[")
        if not isinstance(payload, list):
            raise LlmOutputError("Question output is not a JSON array")

        questions = [q for q in (self._to_question(item) for item in payload) if q is not None]
        if not questions:
            raise LlmOutputError("Question output contained no usable questions")
        return questions[:count]

    @staticmethod
    def default_questions() -> List[Question]:
        return [Question(**question) for question in DEFAULT_QUESTIONS]
