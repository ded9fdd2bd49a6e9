from .registry import (
    AGENT_TOOLS,
    TOOL_DESCRIPTIONS,
    TOOL_INTENTS,
    TOOL_KINDS,
    ToolResult,
    build_intent,
    invoke,
    list_tools,
    serialize_result,
    tool_group,
)

__all__ = [
    "AGENT_TOOLS",
    "TOOL_DESCRIPTIONS",
    "TOOL_INTENTS",
    "TOOL_KINDS",
    "ToolResult",
    "build_intent",
    "invoke",
    "list_tools",
    "serialize_result",
    "tool_group",
]
