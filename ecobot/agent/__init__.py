"""
EcoBot chat pipeline: environmental Q&A with live air quality and images.

Usage:
    from ecobot.agent import run_chat
    result = await run_chat("AQI in London", include_image=False)
    # result = ChatResponse(response="...||s1|s2|s3", image="https://...")
"""
from ecobot.agent.graph import run_chat

__all__ = ["run_chat"]
