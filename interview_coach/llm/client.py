"""
LLM collaborator used by question generation, feedback and document analysis.

Every component receives an ``LlmClient`` at construction time. The concrete
class is picked once by ``build_llm_client``: an OpenAI-compatible client when
an API key is configured, otherwise ``MockLlmClient``, which answers every call
with a canned text so that callers keep working without credentials.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from openai import AsyncOpenAI

from interview_coach.config import LlmSettings

logger = logging.getLogger(__name__)

MOCK_RESPONSE = "This is a mock response for preview purposes."


class LlmClient(ABC):
    """Text-completion collaborator: one system prompt, one user prompt, one answer."""

    #: False when no live model is behind this client.
    is_available: bool = True

    @abstractmethod
    async def complete(self,
                       system_prompt: str,
                       user_prompt: str,
                       max_tokens: int = 1000,
                       temperature: float = 0.7) -> str:
        """Returns the model's text answer. Live clients raise on API failure."""


class MockLlmClient(LlmClient):
    """Stand-in used when no LLM credential is configured. Never raises."""

    is_available = False

    def __init__(self, response: str = MOCK_RESPONSE):
        self.response = response

    async def complete(self,
                       system_prompt: str,
                       user_prompt: str,
                       max_tokens: int = 1000,
                       temperature: float = 0.7) -> str:
        logger.debug("LLM not configured, returning canned response")
        return self.response


class OpenAILlmClient(LlmClient):
    """
    Client for OpenAI-compatible chat completion APIs.
    Applies provider-specific token caps and message adjustments.
    """

    # Provider-specific upper bounds for max_tokens
    TOKEN_LIMITS = {
        "default": 1024,
        "openai": 4096,
        "groq": 32768,
        "academic_cloud": 1500,
        "anthropic": 4096,
    }

    def __init__(self, client: Any, model: str):
        """
        Args:
            client: AsyncOpenAI (or API-compatible) client
            model: Model name used for every request
        """
        self.client = client
        self.model = model
        self.base_url = getattr(client, "base_url", "") or ""
        self.provider = self._detect_provider(self.base_url)
        logger.info(f"Initialized OpenAILlmClient with provider: {self.provider}, model: {self.model}")

    @staticmethod
    def _detect_provider(base_url: Any) -> str:
        url_str = str(base_url).lower() if base_url else ""
        host = (urlparse(url_str).hostname or "").lower()

        if "openai.com" in host:
            return "openai"
        elif "anthropic.com" in host:
            return "anthropic"
        elif "groq.com" in host:
            return "groq"
        elif "chat-ai.academiccloud.de" in url_str or "vllm" in url_str:
            return "academic_cloud"
        return "unknown"

    def _prepare_messages_for_provider(self, messages: List[Dict[str, str]]) -> List[Dict[str, str]]:
        prepared_messages = messages.copy()

        if self.provider == "anthropic":
            # Anthropic requires a closing user message
            if prepared_messages[-1]["role"] != "user":
                prepared_messages.append({"role": "user", "content": "answer"})

        elif self.provider == "groq":
            # Groq only accepts 'role' and 'content' with string content
            sanitized = []
            for m in prepared_messages:
                content = m.get("content", "")
                if not isinstance(content, str):
                    content = json.dumps(content, ensure_ascii=False)
                sanitized.append({"role": m["role"], "content": content})
            prepared_messages = sanitized

        return prepared_messages

    def get_token_limit(self, requested: int) -> int:
        cap = self.TOKEN_LIMITS.get(self.provider, self.TOKEN_LIMITS["default"])
        return min(requested, cap)

    async def complete(self,
                       system_prompt: str,
                       user_prompt: str,
                       max_tokens: int = 1000,
                       temperature: float = 0.7) -> str:
        messages = self._prepare_messages_for_provider([
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ])

        logger.info(f"Requesting completion from {self.provider} with {self.model}")
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=self.get_token_limit(max_tokens),
            temperature=temperature,
        )
        content = response.choices[0].message.content or ""
        return content.strip()


def build_llm_client(settings: LlmSettings, client: Optional[Any] = None) -> LlmClient:
    """
    Chooses the live or the mock collaborator.

    Args:
        settings: LLM credential, base URL and model
        client: Optional pre-built OpenAI-compatible client (mainly for tests)
    """
    if not settings.is_configured:
        logger.warning("OPENAI_API_KEY not set, falling back to mock LLM responses")
        return MockLlmClient()

    if client is None:
        base_url = settings.base_url.rstrip("/")
        host = (urlparse(base_url).hostname or "").lower()

        default_headers: Dict[str, str] = {}
        if host.endswith("anthropic.com"):
            default_headers["anthropic-version"] = "2023-06-01"
            default_headers["x-api-key"] = settings.api_key

        client = AsyncOpenAI(
            api_key=settings.api_key,
            base_url=base_url,
            default_headers=default_headers,
        )
    return OpenAILlmClient(client, settings.model)
