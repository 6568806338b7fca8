"""Remote summarization for changelogs."""

from __future__ import annotations

from tagbump.ai.client import MessagesClient, SummarizationClient

__all__ = ["MessagesClient", "SummarizationClient"]
