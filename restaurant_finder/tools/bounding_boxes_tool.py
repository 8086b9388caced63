from typing import List
from langchain_core.tools import StructuredTool

from restaurant_finder.finder import RestaurantFinder
from restaurant_finder.schemas import BoundingBoxInput

TOOL_NAME = "BoundingBoxesTool"
TOOL_DESCRIPTION = "Inputs a state, outputs place IDs of restaurants within divided bounding boxes."


def create_bounding_boxes_tool(finder: RestaurantFinder) -> StructuredTool:
    """
    Wrap a RestaurantFinder as a tool the agent can call.

    Lookup failures are ToolExceptions, so they reach the model as an error
    message instead of aborting the agent run.
    """

    async def find_restaurants_by_state(state: str) -> List[str]:
        return await finder.find_restaurants_by_state(state)

    return StructuredTool.from_function(
        coroutine=find_restaurants_by_state,
        name=TOOL_NAME,
        description=TOOL_DESCRIPTION,
        args_schema=BoundingBoxInput,
        handle_tool_error=True,
    )
