"""
LLM factory: creates a configured Anthropic chat model.

Temperature is a little above zero: answers should stay factual, but the
follow-up suggestions read better with some variety.
"""
from langchain_anthropic import ChatAnthropic

from ecobot.config import settings


def get_llm() -> ChatAnthropic:
    """Build a ChatAnthropic instance with project-wide settings."""
    return ChatAnthropic(
        model=settings.llm_model,
        api_key=settings.anthropic_api_key,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        timeout=settings.llm_timeout_seconds,
    )


def message_text(content) -> str:
    """Flatten message content to plain text.

    Anthropic responses can come back as a list of content blocks instead of
    a single string.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return "" if content is None else str(content)
