# tcmchart/llm/client.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Dict, Optional

from openai import OpenAI

from tcmchart.config import get_settings


class LLMClient(ABC):
    """
    Chat-completion provider used to draft chart narratives.
    """

    @abstractmethod
    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        """
        messages: list of {"role": "system"|"user"|"assistant", "content": "..."}
        returns: assistant content as a string
        """
        ...


class OpenAILLMClient(LLMClient):
    """
    Any OpenAI-compatible endpoint (OPENAI_BASE_URL) via the official client.
    """

    def __init__(self, model: Optional[str] = None):
        settings = get_settings()
        if not settings.openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY is not set in environment (.env)."
            )

        self.client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
        self.default_model = model or settings.llm_model
        self.default_temperature = settings.llm_temperature

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        completion = self.client.chat.completions.create(
            model=model or self.default_model,
            messages=messages,
            temperature=self.default_temperature if temperature is None else temperature,
        )
        content = completion.choices[0].message.content
        return content or ""


class UnconfiguredLLMClient(LLMClient):
    """
    Stand-in used when no provider is configured; every call fails so the
    caller falls back to its placeholder text.
    """

    def __init__(self, reason: str):
        self.reason = reason

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        raise RuntimeError(self.reason)
