"""Upstream LLM boundary."""

from lettercast.boundary.llm.openai_client import OpenAIChatClient
from lettercast.boundary.llm.sse import DONE_SENTINEL, iter_sse_data

__all__ = ["OpenAIChatClient", "iter_sse_data", "DONE_SENTINEL"]
