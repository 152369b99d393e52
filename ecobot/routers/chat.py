"""
Chat router: the single endpoint the chat client talks to.

It handles three things:
1. Rejecting empty questions with a fixed 400 message
2. Running the chat pipeline and returning `{response, image}`
3. Catching unexpected failures so they don't leak internals to the client
"""
import logging

from fastapi import APIRouter, HTTPException

from ecobot.agent import run_chat
from ecobot.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger("ecobot-api.chat")

router = APIRouter()

QUERY_REQUIRED = "Query is required"
GENERATION_FAILED = "Failed to generate response"


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """Accept a question, run prompt → model → parse → image, return the payload.

    Air quality and image lookups degrade to "no data" on their own; only a
    model failure (or a bug) ends up here as a 500.
    """
    if not request.query or not request.query.strip():
        raise HTTPException(status_code=400, detail=QUERY_REQUIRED)

    try:
        return await run_chat(request.query, request.include_image)
    except Exception as e:
        # Full traceback in the logs, fixed message to the client
        logger.exception("Chat pipeline error: %s", e)
        raise HTTPException(status_code=500, detail=GENERATION_FAILED)
