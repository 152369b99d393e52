"""
Async client for the EcoBot chat API.

Mirrors what the web UI does with a response:
    - splits `response` on the first `||` into text and suggestion chips
    - retries 5xx and connection errors with exponential backoff
    - gives up with a fixed "Connection failed." message

Usage:
    async with EcoBotClient("http://localhost:3001") as bot:
        message = await bot.ask("AQI in Delhi", include_image=True)
        print(message.text, message.suggestions)
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime

import httpx

logger = logging.getLogger("ecobot-client")

CONNECTION_FAILED = "Connection failed."
UNEXPECTED_RESPONSE = "Unexpected response."

WELCOME_TEXT = "Hi! I'm EcoBot. Ask me anything about the environment!"
WELCOME_SUGGESTIONS = ["What is pollution?", "AQI in Delhi", "Save water tips"]


@dataclass
class ChatMessage:
    sender: str
    text: str
    image: str | None = None
    suggestions: list[str] = field(default_factory=list)
    is_error: bool = False


def parse_chat_payload(payload: dict) -> ChatMessage:
    """Turn a `{response, image}` body into a bot message."""
    raw = payload.get("response") if isinstance(payload, dict) else None
    if not isinstance(raw, str) or not raw:
        return ChatMessage(sender="bot", text=UNEXPECTED_RESPONSE, is_error=True)

    parts = raw.split("||")
    suggestions = []
    if len(parts) > 1 and parts[1]:
        suggestions = [s.strip() for s in parts[1].split("|") if s.strip()]
    return ChatMessage(
        sender="bot",
        text=parts[0].strip(),
        image=payload.get("image") or None,
        suggestions=suggestions,
    )


class EcoBotClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        timeout: float = 60.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds
        self._http = http or httpx.AsyncClient(timeout=timeout)
        self._owns_http = http is None
        self.history: list[ChatMessage] = [
            ChatMessage(sender="bot", text=WELCOME_TEXT, suggestions=list(WELCOME_SUGGESTIONS))
        ]

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        if self._owns_http:
            await self._http.aclose()

    async def _post_chat(self, query: str, include_image: bool) -> httpx.Response:
        """POST with exponential backoff on 5xx and transport errors."""
        url = f"{self.base_url}/api/chat"
        body = {"query": query, "includeImage": include_image}

        for attempt in range(self.max_attempts):
            last_attempt = attempt == self.max_attempts - 1
            try:
                response = await self._http.post(url, json=body)
            except httpx.TransportError as e:
                if last_attempt:
                    raise
                logger.warning("Chat request failed (%s), retrying", e)
            else:
                if response.status_code < 500 or last_attempt:
                    return response
                logger.warning("Chat request got %d, retrying", response.status_code)
            await asyncio.sleep(self.backoff_seconds * 2 ** attempt)

        raise RuntimeError("Unexpected retry state in _post_chat")

    async def ask(self, query: str, include_image: bool = False) -> ChatMessage:
        """Send one question and record both sides in the history."""
        if not query.strip():
            raise ValueError("query must not be empty")

        self.history.append(ChatMessage(sender="user", text=query))
        try:
            response = await self._post_chat(query, include_image)
            response.raise_for_status()
            message = parse_chat_payload(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Chat request gave up: %s", e)
            message = ChatMessage(sender="bot", text=CONNECTION_FAILED, is_error=True)

        self.history.append(message)
        return message

    def transcript(self) -> str:
        """Plain-text dump of the conversation, the same shape as the UI's 'Save Chat'."""
        lines = [f"TRANSCRIPT - {datetime.now():%Y-%m-%d %H:%M:%S}", ""]
        for msg in self.history:
            lines.append(f"[{msg.sender.upper()}]: {msg.text}")
            if msg.image:
                lines.append(f"[Image]: {msg.image}")
            lines.append("")
        return "\n".join(lines)
