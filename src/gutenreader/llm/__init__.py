"""LLM integration for synopsis generation."""

from gutenreader.llm.client import LLMClient, LLMResponse, get_client

__all__ = ["LLMClient", "LLMResponse", "get_client"]
