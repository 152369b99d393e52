"""
Pydantic models for the chat endpoint.

ChatRequest keeps `query` optional so a missing or blank question reaches
the router and gets the documented 400 instead of a generic 422.
ChatResponse is the wire contract the chat client splits on `||`.
"""
from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str | None = Field(
        None,
        description="Question about an environmental topic",
    )
    include_image: bool = Field(
        False,
        alias="includeImage",
        description="Ask for an illustrative image alongside the answer",
    )


class ChatResponse(BaseModel):
    response: str
    image: str | None = None
