"""
LangGraph chat pipeline: one pass per request.

Architecture:
    [prompt] → [model] → [parse] → image wanted? → Yes → [image] → [respond] → END
                                                 → No  → [respond] → END

prompt   detects air-quality intent and, on a hit, splices live AQI data
         into the question (fail-soft: no data just means the plain query)
model    sends system prompt + prompt to the LLM; the only step allowed to
         fail the request
parse    splits `answer||keyword||suggestions` and fills in fallbacks
image    best-effort illustration, only reached when the caller asked for
         one or live AQI data was used
respond  builds the `{response, image}` wire payload

The graph is compiled once and reused across all requests.
"""
import logging

from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.graph import END, StateGraph

from ecobot.agent.intent import build_prompt
from ecobot.agent.llm import get_llm, message_text
from ecobot.agent.parser import (
    assemble_response,
    fetch_image_for,
    parse_model_output,
    should_fetch_image,
)
from ecobot.agent.prompts import SYSTEM_PROMPT
from ecobot.agent.state import ChatState
from ecobot.config import settings
from ecobot.http import get_http
from ecobot.models.chat import ChatResponse

logger = logging.getLogger("ecobot-agent")


def _build_graph() -> StateGraph:
    """Wire up the pipeline: prompt → model → parse → (image) → respond."""

    llm = get_llm()

    async def prompt_node(state: ChatState) -> dict:
        prompt, snapshot = await build_prompt(state["query"], get_http(), settings)
        if snapshot is not None:
            logger.info("Air-quality intent matched: %s", snapshot.city_name)
        return {"prompt": prompt, "snapshot": snapshot}

    async def model_node(state: ChatState) -> dict:
        response = await llm.ainvoke([
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=state["prompt"]),
        ])
        return {"raw_output": message_text(response.content)}

    def parse_node(state: ChatState) -> dict:
        return {"parsed": parse_model_output(state["raw_output"])}

    def wants_image(state: ChatState) -> str:
        """Route to the image lookup only when the policy asks for one."""
        if should_fetch_image(state["include_image"], state.get("snapshot")):
            return "image"
        return "respond"

    async def image_node(state: ChatState) -> dict:
        image_url = await fetch_image_for(
            state["parsed"],
            state.get("snapshot"),
            state["query"],
            get_http(),
            settings,
        )
        return {"image_url": image_url}

    def respond_node(state: ChatState) -> dict:
        return {"response": assemble_response(state["parsed"], state.get("image_url"))}

    graph = StateGraph(ChatState)
    graph.add_node("prompt", prompt_node)
    graph.add_node("model", model_node)
    graph.add_node("parse", parse_node)
    graph.add_node("image", image_node)
    graph.add_node("respond", respond_node)
    graph.set_entry_point("prompt")
    graph.add_edge("prompt", "model")
    graph.add_edge("model", "parse")
    graph.add_conditional_edges("parse", wants_image, {"image": "image", "respond": "respond"})
    graph.add_edge("image", "respond")
    graph.add_edge("respond", END)

    return graph


# Lazy-compiled singleton, built on first request, reused after
_compiled = None


def _get_graph():
    """Get or build the compiled graph (singleton pattern)."""
    global _compiled
    if _compiled is None:
        _compiled = _build_graph().compile()
    return _compiled


async def run_chat(query: str, include_image: bool = False) -> ChatResponse:
    """
    Main entry point: build the prompt, ask the model, parse, illustrate.

    Returns:
        ChatResponse(response="answer||s1|s2|s3", image=url or None)
    """
    graph = _get_graph()

    initial_state = {
        "query": query,
        "include_image": include_image,
        "prompt": query,
        "snapshot": None,
        "raw_output": "",
        "parsed": None,
        "image_url": None,
        "response": None,
    }

    result = await graph.ainvoke(initial_state)
    return result["response"]
