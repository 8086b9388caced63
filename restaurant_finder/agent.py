import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from langchain.agents import create_agent
from langchain_core.load import dumpd
from langchain_core.load.serializable import Serializable
from langchain_core.messages import ToolMessage
from langchain_core.tools import BaseTool
from langchain_google_genai import ChatGoogleGenerativeAI

from restaurant_finder.config import LLMConfig
from restaurant_finder.tools import TOOL_NAME

# Configure logging
logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful assistant that finds restaurants in US states.
When the user asks about restaurants in a state, call the BoundingBoxesTool with the state name.
The tool returns Google place IDs. Report how many were found and list them.
If the tool reports an error, tell the user the state could not be found and do not invent place IDs."""


def create_restaurant_agent(tools: Sequence[BaseTool], config: Optional[LLMConfig] = None):
    """Create a tool calling agent backed by Gemini."""
    config = config or LLMConfig()
    logger.info(f"Creating LLM: {config.model_name} with temperature: {config.temperature}")
    llm = ChatGoogleGenerativeAI(model=config.model_name, temperature=config.temperature)
    return create_agent(model=llm, tools=list(tools), system_prompt=SYSTEM_PROMPT)


async def stream_agent_events(agent, user_input: str) -> AsyncIterator[Dict[str, Any]]:
    """Yield the agent's v2 stream events for a single user message."""
    async for event in agent.astream_events(
        {"messages": [{"role": "user", "content": user_input}]},
        version="v2",
    ):
        yield event


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Serializable):
        return dumpd(obj)
    return str(obj)


def to_jsonable(event: Dict[str, Any]) -> Dict[str, Any]:
    """Turn a stream event into plain JSON data that can be sent to a client."""
    return json.loads(json.dumps(event, default=_json_default))


def place_ids_from_event(event: Dict[str, Any]) -> List[str]:
    """Place ids carried by a finished BoundingBoxesTool call, else []."""
    if event.get("event") != "on_tool_end" or event.get("name") != TOOL_NAME:
        return []

    output = event.get("data", {}).get("output")
    if isinstance(output, ToolMessage):
        if output.status == "error":
            return []
        output = output.content
    if isinstance(output, list):
        return [item for item in output if isinstance(item, str)]
    return []


def text_from_event(event: Dict[str, Any]) -> str:
    """Text streamed by a chat model token event, else ''."""
    if event.get("event") != "on_chat_model_stream":
        return ""
    chunk = event.get("data", {}).get("chunk")
    if chunk is None:
        return ""
    return chunk.text
