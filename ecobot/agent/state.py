"""
State that flows between nodes in the chat graph.

Every key is written once by the node that owns it, so no reducers are
needed: a plain overwrite is the right merge. The state lives for exactly
one request.
"""
from typing_extensions import TypedDict

from ecobot.agent.parser import ParsedChatResult
from ecobot.models.chat import ChatResponse
from ecobot.services.air_quality import AirQualitySnapshot


class ChatState(TypedDict):
    # Inputs
    query: str
    include_image: bool
    # prompt node: the (possibly augmented) prompt and the AQI reading behind it
    prompt: str
    snapshot: AirQualitySnapshot | None
    # model node
    raw_output: str
    # parse node
    parsed: ParsedChatResult | None
    # image node, only visited when an illustration is wanted
    image_url: str | None
    # respond node
    response: ChatResponse | None
