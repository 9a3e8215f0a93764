"""
Utility functions for turning free-form LLM text into JSON payloads.
"""

import json
import logging
from typing import Any

from interview_coach.errors import LlmOutputError

logger = logging.getLogger(__name__)

_CLOSERS = {"{": "}", "[": "]"}


def clean_json_response(text: str) -> str:
    """
    Strips the wrapping LLMs like to put around JSON: a leading <think> block
    and markdown code fences.

    Args:
        text: The raw LLM response

    Returns:
        The response without reasoning preamble and fences
    """
    text = (text or "").strip()

    # Remove extensive LLM "thinking" processes
    if text.startswith("<think>"):
        think_end = text.find("</think>")
        if think_end != -1:
            text = text[think_end + 8:].strip()
            logger.debug("Removed <think> block from response")

    # Remove markdown formatting
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def extract_balanced(text: str, opener: str) -> str:
    """
    Returns the first balanced substring that starts with ``opener`` ("{" or "[").

    Brackets inside JSON string literals are ignored. Raises LlmOutputError when
    no opener exists or the first one is never closed.
    """
    if opener not in _CLOSERS:
        raise ValueError(f"Unsupported opener {opener!r}")
    closer = _CLOSERS[opener]

    start = text.find(opener)
    if start == -1:
        raise LlmOutputError(f"No '{opener}' found in LLM output")

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start:index + 1]

    raise LlmOutputError(f"Unbalanced '{opener}' in LLM output")


def parse_json_payload(text: str, opener: str) -> Any:
    """
    Cleans ``text``, extracts the first balanced object/array and decodes it.

    Raises:
        LlmOutputError: when nothing usable can be extracted or decoded
    """
    candidate = extract_balanced(clean_json_response(text), opener)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.debug(f"Undecodable JSON candidate: {truncate_for_log(candidate)}")
        raise LlmOutputError(f"Invalid JSON in LLM output: {e}") from e


def truncate_for_log(text: str, max_length: int = 200) -> str:
    """
    Truncates text for logging purposes to avoid overwhelming logs.
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
