from .bounding_boxes_tool import create_bounding_boxes_tool, TOOL_NAME, TOOL_DESCRIPTION
