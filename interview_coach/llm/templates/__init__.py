"""
Templates package for LLM prompts.
Contains templates for feedback generation and question generation.
"""

from .feedback_templates import FEEDBACK_TEMPLATES, FEEDBACK_SYSTEM_PROMPTS
from .question_generation_templates import (
    QUESTION_GENERATION_TEMPLATES,
    QUESTION_GENERATION_SYSTEM_PROMPTS,
)

ALL_TEMPLATES = {
    **FEEDBACK_TEMPLATES,
    **QUESTION_GENERATION_TEMPLATES,
}

ALL_SYSTEM_PROMPTS = {
    **FEEDBACK_SYSTEM_PROMPTS,
    **QUESTION_GENERATION_SYSTEM_PROMPTS,
}
