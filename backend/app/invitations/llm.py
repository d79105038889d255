"""LLM client used for invitation text, backed by LiteLLM."""

import logging
import os
from typing import Protocol

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_litellm import ChatLiteLLM

from app.config import Settings
from app.invitations.errors import GenerationTransientError

logger = logging.getLogger(__name__)


class LLMClient(Protocol):
    """Anything that can turn a system + user prompt into text."""

    async def complete(self, system_prompt: str, user_prompt: str) -> str: ...


class LiteLLMClient:
    """Chat completion through LiteLLM (DeepSeek, OpenAI, ... via one API).

    Every failure surfaces as ``GenerationTransientError``; retrying is left
    to the caller, so LiteLLM's own retries are disabled.
    """

    def __init__(
        self,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1500,
        request_timeout: float = 60.0,
        api_base: str | None = None,
    ) -> None:
        self.model = model
        self._llm = ChatLiteLLM(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            request_timeout=request_timeout,
            api_base=api_base or None,
            max_retries=1,
        )

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        try:
            response = await self._llm.ainvoke(messages)
        except Exception as exc:
            raise GenerationTransientError(f"{self.model} request failed: {exc}") from exc

        content = response.content if isinstance(response.content, str) else str(response.content)
        content = content.strip()
        if not content:
            raise GenerationTransientError(f"{self.model} returned an empty completion")
        return content


def build_llm_client(settings: Settings) -> LiteLLMClient | None:
    """Create the configured LLM client, or None when no provider key is set."""
    # LiteLLM reads provider keys from the environment
    if settings.deepseek_api_key:
        os.environ["DEEPSEEK_API_KEY"] = settings.deepseek_api_key
    if settings.openai_api_key:
        os.environ["OPENAI_API_KEY"] = settings.openai_api_key

    if not settings.llm_configured:
        logger.warning("No LLM API key configured; invitations will use templates")
        return None

    logger.info("LLM client configured (model=%s)", settings.default_llm_model)
    return LiteLLMClient(
        model=settings.default_llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        request_timeout=settings.llm_request_timeout,
        api_base=settings.llm_api_base,
    )
