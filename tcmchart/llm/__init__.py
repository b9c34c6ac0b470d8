# tcmchart/llm/__init__.py
from .client import LLMClient, OpenAILLMClient, UnconfiguredLLMClient

__all__ = ["LLMClient", "OpenAILLMClient", "UnconfiguredLLMClient"]
