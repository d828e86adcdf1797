# -*- coding: utf-8 -*-
from academic_progress.server import mcp as progress_mcp
from mcp_gateway.server import mcp as gateway_mcp

# Server registry mapping server names to MCP instances.
# "progress_server" runs the library in-process; "gateway" routes to the progress service.
SERVER_REGISTRY = {
    "progress_server": progress_mcp,
    "gateway": gateway_mcp,
}

GATEWAY_TOOLS = frozenset({"get_gateway_info", "list_available_tools"})


async def list_tool_schemas(server_name: str = "gateway") -> list[dict]:
    """Collect and return JSON schemas of all tools available on one registered MCP server."""
    server = SERVER_REGISTRY[server_name]
    schemas = []

    all_tools = await server.get_tools()

    for tool_key, tool in all_tools.items():
        schemas.append({
            "server": "gateway" if tool_key in GATEWAY_TOOLS else "progress_server",
            "name": tool_key,
            "title": tool.title or tool_key,
            "description": tool.description or "",
            "inputSchema": tool.parameters or {},
            "outputSchema": tool.output_schema or {},
        })

    return schemas


async def get_tool(name: str, server_name: str = "progress_server"):
    """Look up a registered tool by name. Call the plain function via ``.fn``."""
    tools = await SERVER_REGISTRY[server_name].get_tools()
    if name not in tools:
        raise KeyError(f"Tool {name!r} is not registered on {server_name}")
    return tools[name]
