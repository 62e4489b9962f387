#!/usr/bin/env python3
"""Example: calling docker-code-mcp over HTTP with a bearer token.

Start the server first:

    export DOCKER_CONTAINER_ID=my-dev-container
    export MCP_AUTH_TOKEN=$(python scripts/generate_auth_token.py | sed -n 3p)
    docker-code-mcp --transport http --port 4200

Then run:

    MCP_AUTH_TOKEN=... python examples/http_client.py
"""

import asyncio
import os

from fastmcp import Client
from fastmcp.client.transports import StreamableHttpTransport

SERVER_URL = os.environ.get("MCP_SERVER_URL", "http://127.0.0.1:4200/mcp")


def _text(result: object) -> str:
    content = getattr(result, "content", result)
    return "\n".join(getattr(block, "text", str(block)) for block in content)


async def main() -> None:
    token = os.environ.get("MCP_AUTH_TOKEN", "")
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    transport = StreamableHttpTransport(SERVER_URL, headers=headers)

    async with Client(transport) as client:
        tools = await client.list_tools()
        print("Tools:", ", ".join(tool.name for tool in tools))

        print("\n== exec ==")
        print(_text(await client.call_tool("exec", {"command": "uname -a && pwd"})))

        print("\n== write_file / read_file ==")
        await client.call_tool(
            "write_file", {"file_path": "/tmp/hello.txt", "contents": "hello\nworld\n"}
        )
        print(_text(await client.call_tool("read_file", {"target_file": "/tmp/hello.txt"})))

        print("\n== grep ==")
        print(_text(await client.call_tool("grep", {"pattern": "world", "path": "/tmp"})))


if __name__ == "__main__":
    asyncio.run(main())
